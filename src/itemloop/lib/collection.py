"""Ordered, duplicate-permitting collection of text items.

Examples:
    >>> items = ItemCollection()
    >>> items.append("apple")
    >>> items.append("apple")
    >>> items.remove_first("apple")
    True
    >>> items.items()
    ['apple']
    >>> items.remove_first("pear")
    False
"""

from collections.abc import Iterator


class ItemCollection:
    """Items in insertion order.

    Only :meth:`append` and :meth:`remove_first` mutate the collection, so
    its contents always reflect the sequence of successful operations.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[str] = []

    def append(self, item: str) -> None:
        self._items.append(item)

    def remove_first(self, item: str) -> bool:
        """Remove the earliest occurrence of ``item``.

        Returns:
            True if an occurrence was removed, False if ``item`` was absent
            (the collection is left unchanged).
        """
        try:
            self._items.remove(item)
        except ValueError:
            return False
        return True

    def items(self) -> list[str]:
        """Return a snapshot copy of the items."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"ItemCollection({self._items!r})"
