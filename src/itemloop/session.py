"""Read-dispatch-respond loop over an item collection.

A :class:`Session` owns everything a run needs: the item collection, the
input stream, the output writer, a stop signal for the ``loop`` command and
per-command metrics. Nothing is kept in module globals, so several sessions
can run side by side in one process (tests do this).

Usage:
    session = Session(stdin=io.StringIO("add\\napple\\nexit\\n"), write=print)
    summary = session.start()
    session.collection.items()  # ['apple']
"""

import logging
import sys
import time
from collections.abc import Callable
from datetime import datetime
from typing import Literal, TextIO

import typer

from itemloop.config import Settings, load_settings
from itemloop.lib.collection import ItemCollection
from itemloop.lib.metrics import MetricsCollector
from itemloop.lib.stop import StopSignal
from itemloop.models import (
    Command,
    LoopReport,
    SessionState,
    SessionSummary,
    parse_command,
)

logger = logging.getLogger(__name__)

Writer = Callable[[str], None]
ProgressCallback = Callable[[int], None]
"""Called with the running insertion total at every progress message."""

Handler = Callable[[], SessionState]

COMMAND_PROMPT = "Enter command (add/remove/exit):"
ADD_PROMPT = "Enter item to add:"
REMOVE_PROMPT = "Enter item to remove:"
EXIT_MESSAGE = "Exiting program."
INVALID_MESSAGE = "Invalid command."
LOOP_START_MESSAGE = "start loop"

type EndReason = Literal["exit", "eof", "interrupt"]


class Session:
    """One interactive session from greeting to termination.

    Args:
        settings: Effective settings. Loaded from the environment if omitted.
        stdin: Line-oriented input. Defaults to ``sys.stdin`` at start time.
        write: Output sink, one call per line. Defaults to ``typer.echo``.
        stop: Stop signal checked by the ``loop`` command on every iteration.
        on_progress: Instrumentation hook called at every progress message.
        sleep: Used for ``loop_delay_seconds``; replaceable in tests.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        stdin: TextIO | None = None,
        write: Writer | None = None,
        stop: StopSignal | None = None,
        on_progress: ProgressCallback | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.collection = ItemCollection()
        self.stop = stop if stop is not None else StopSignal()
        self.metrics = MetricsCollector()
        self.state = SessionState.AWAITING_COMMAND
        self.loop_runs: list[LoopReport] = []
        self.session_id = datetime.now().strftime("%Y%m%d-%H%M%S")

        self._stdin = stdin
        self._write: Writer = write if write is not None else typer.echo
        self._on_progress = on_progress
        self._sleep = sleep
        self._ended_by: EndReason = "exit"
        self._handlers: dict[Command, Handler] = {
            Command.ADD: self._handle_add,
            Command.REMOVE: self._handle_remove,
            Command.EXIT: self._handle_exit,
            Command.LOOP: self._handle_loop,
        }

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def start(self) -> SessionSummary:
        """Run until ``exit``, end of input or Ctrl-C at a prompt.

        Returns:
            Summary of the session, also logged at INFO.
        """
        started_at = datetime.now().isoformat(timespec="seconds")
        started = time.monotonic()
        logger.info("Session %s started", self.session_id)

        self._write(self.settings.greeting)
        while self.state is SessionState.AWAITING_COMMAND:
            self._write(COMMAND_PROMPT)
            try:
                line = self._read_line()
                if line is None:
                    self.state = self._terminate("eof")
                    break
                self.state = self.dispatch(line)
            except KeyboardInterrupt:
                self._write("")
                self.state = self._terminate("interrupt")

        summary = SessionSummary(
            session_id=self.session_id,
            started_at=started_at,
            ended_by=self._ended_by,
            commands={
                name: count
                for name, count in self.metrics.call_counts().items()
                if name != "invalid"
            },
            invalid_commands=self.metrics.call_counts().get("invalid", 0),
            item_count=len(self.collection),
            loop_runs=list(self.loop_runs),
            command_time_ms=self.metrics.durations_ms(),
            duration_seconds=round(time.monotonic() - started, 3),
        )
        logger.info("Session summary: %s", summary.model_dump_json())
        self.metrics.log_summary()
        return summary

    def dispatch(self, line: str) -> SessionState:
        """Run the handler for one command line and return the next state."""
        command = parse_command(line)
        name = command.value if command is not None else "invalid"
        logger.debug("Dispatching %r as %s", line, name)
        handler = self._handlers.get(command) if command is not None else None
        with self.metrics.measure(name):
            if handler is None:
                return self._handle_invalid()
            return handler()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _read_line(self) -> str | None:
        """Read one line without its terminator, or ``None`` at end of input."""
        stream = self._stdin if self._stdin is not None else sys.stdin
        line = stream.readline()
        if not line:
            return None
        return line.removesuffix("\n").removesuffix("\r")

    def _terminate(self, ended_by: EndReason) -> SessionState:
        self._write(EXIT_MESSAGE)
        self._ended_by = ended_by
        return SessionState.TERMINATED

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _handle_add(self) -> SessionState:
        self._write(ADD_PROMPT)
        item = self._read_line()
        if item is None:
            return self._terminate("eof")
        self.collection.append(item)
        self._write(f"Item added: {item}")
        return SessionState.AWAITING_COMMAND

    def _handle_remove(self) -> SessionState:
        self._write(REMOVE_PROMPT)
        item = self._read_line()
        if item is None:
            return self._terminate("eof")
        if self.collection.remove_first(item):
            self._write(f"Item removed: {item}")
        else:
            self._write(f"Item not found: {item}")
        return SessionState.AWAITING_COMMAND

    def _handle_exit(self) -> SessionState:
        return self._terminate("exit")

    def _handle_invalid(self) -> SessionState:
        self._write(INVALID_MESSAGE)
        return SessionState.AWAITING_COMMAND

    def _handle_loop(self) -> SessionState:
        """Append ``loop:<n>`` items until stopped or the limit is reached.

        Unbounded unless ``loop_limit`` is set; the stop signal (or Ctrl-C)
        is the only other way back to the command prompt.
        """
        interval = self.settings.progress_interval
        limit = self.settings.loop_limit
        delay = self.settings.loop_delay_seconds
        report = LoopReport()
        start_len = len(self.collection)
        count = 0

        self._write(LOOP_START_MESSAGE)
        logger.info("Loop started (limit=%s, interval=%d)", limit, interval)
        try:
            while not self.stop.is_set():
                if limit is not None and count >= limit:
                    report.ended_by = "limit"
                    break
                self.collection.append(f"loop:{count}")
                count += 1
                if count % interval == 0:
                    self._write(f"Item add count: {count}")
                    report.progress_reports += 1
                    if self._on_progress is not None:
                        self._on_progress(count)
                    if delay > 0:
                        self._sleep(delay)
        except KeyboardInterrupt:
            self.stop.request("interrupt")

        report.inserted = len(self.collection) - start_len
        self.loop_runs.append(report)
        self._write(f"stop loop: {report.inserted} items added")
        logger.info(
            "Loop ended by %s after %d items (%s)",
            report.ended_by,
            report.inserted,
            self.stop.reason or "no stop requested",
        )
        self.stop.clear()
        return SessionState.AWAITING_COMMAND
