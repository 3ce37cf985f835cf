"""Shared test fixtures.

Add fixtures here that are used across multiple test files.
"""

import io
from collections.abc import Callable
from pathlib import Path

import pytest

from itemloop.config import Settings
from itemloop.lib.stop import StopSignal
from itemloop.session import ProgressCallback, Session

type SessionFactory = Callable[..., tuple[Session, list[str]]]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from ITEMLOOP_* variables and stray .env files."""
    for name in (
        "ITEMLOOP_GREETING",
        "ITEMLOOP_PROGRESS_INTERVAL",
        "ITEMLOOP_LOOP_LIMIT",
        "ITEMLOOP_LOOP_DELAY_SECONDS",
        "ITEMLOOP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def make_session(settings: Settings) -> SessionFactory:
    """Build a session fed from ``lines`` that records its output."""

    def factory(
        *lines: str,
        settings_: Settings | None = None,
        stop: StopSignal | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> tuple[Session, list[str]]:
        output: list[str] = []
        text = "".join(f"{line}\n" for line in lines)
        session = Session(
            settings=settings_ or settings,
            stdin=io.StringIO(text),
            write=output.append,
            stop=stop,
            on_progress=on_progress,
            sleep=lambda _: None,
        )
        return session, output

    return factory
