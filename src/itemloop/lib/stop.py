"""Cooperative stop signal for long-running loops.

The ``loop`` command checks the signal on every iteration. Anything holding
a reference (a test, a watchdog thread, a KeyboardInterrupt handler) can
request a stop; the loop notices on its next iteration and returns.

Usage:
    from itemloop.lib.stop import StopSignal

    stop = StopSignal()
    threading.Timer(5.0, stop.request, args=("timeout",)).start()

    while not stop.is_set():
        ...
"""

import logging
import threading

logger = logging.getLogger(__name__)


class StopSignal:
    """Thread-safe flag with the reason it was raised."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: str | None = None

    @property
    def reason(self) -> str | None:
        """Reason passed to the most recent :meth:`request`, if set."""
        return self._reason

    def request(self, reason: str = "requested") -> None:
        """Ask the running loop to stop."""
        self._reason = reason
        self._event.set()
        logger.debug("Stop requested: %s", reason)

    def is_set(self) -> bool:
        return self._event.is_set()

    def clear(self) -> None:
        """Re-arm the signal so it can be requested again."""
        self._event.clear()
        self._reason = None
