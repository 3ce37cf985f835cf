"""Commands, session state and result models.

The command vocabulary is fixed: ``add``, ``remove``, ``exit`` and ``loop``.
A raw input line maps to exactly one :class:`Command` or to ``None``
(unrecognised). Matching is exact, so ``"Add"`` or ``"add "`` are invalid.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field


class Command(StrEnum):
    """Recognised command keywords."""

    ADD = "add"
    REMOVE = "remove"
    EXIT = "exit"
    LOOP = "loop"


class SessionState(StrEnum):
    """States of the session loop."""

    AWAITING_COMMAND = "awaiting_command"
    TERMINATED = "terminated"


def parse_command(line: str) -> Command | None:
    """Map a raw input line to a command, or ``None`` if unrecognised."""
    try:
        return Command(line)
    except ValueError:
        return None


class LoopReport(BaseModel):
    """Outcome of one run of the ``loop`` command."""

    inserted: int = Field(default=0, description="Items appended by this run")
    progress_reports: int = Field(
        default=0, description="Progress messages emitted by this run"
    )
    ended_by: Literal["stopped", "limit"] = Field(
        default="stopped", description="Why the sub-loop returned"
    )


class SessionSummary(BaseModel):
    """What happened during one session, logged when it terminates."""

    session_id: str
    started_at: str
    ended_by: Literal["exit", "eof", "interrupt"]
    commands: dict[str, int] = Field(
        default_factory=dict, description="Dispatch count per command keyword"
    )
    invalid_commands: int = 0
    command_time_ms: dict[str, float] = Field(
        default_factory=dict, description="Total handler time per command keyword"
    )
    item_count: int = Field(default=0, description="Items left in the collection")
    loop_runs: list[LoopReport] = Field(default_factory=list)
    duration_seconds: float | None = None
