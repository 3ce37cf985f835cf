"""CLI for running an interactive item session.

With no options the session behaves exactly like the plain program: the
``loop`` command never returns on its own. The options bound it for demos
and scripted runs.

Usage:
    uv run itemloop
    uv run itemloop --loop-limit 10000
    printf 'add\\napple\\nexit\\n' | uv run python -m itemloop.cli
"""

import io
import logging
import sys
from typing import Annotated

import typer

from itemloop.config import ConfigurationError, load_settings
from itemloop.session import Session
from itemloop.version import VERSION

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="itemloop",
    help="Interactive item list session",
    add_completion=False,
    pretty_exceptions_show_locals=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"itemloop {VERSION}")
        raise typer.Exit()


@app.command()
def run(
    loop_limit: Annotated[
        int | None,
        typer.Option(
            "--loop-limit",
            help="Return from the loop command after this many insertions",
        ),
    ] = None,
    progress_interval: Annotated[
        int | None,
        typer.Option(
            "--progress-interval", help="Insertions between progress messages"
        ),
    ] = None,
    loop_delay: Annotated[
        float | None,
        typer.Option("--loop-delay", help="Seconds to pause after each progress message"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    """Start a session reading commands from standard input."""
    try:
        settings = load_settings().with_overrides(
            loop_limit=loop_limit,
            progress_interval=progress_interval,
            loop_delay_seconds=loop_delay,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=settings.log_level)

    logger.debug("Effective settings: %s", settings.model_dump())

    # Undecodable bytes become U+FFFD instead of ending the session
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(errors="replace")

    Session(settings=settings).start()


if __name__ == "__main__":
    app()
