"""
Process entry point for ``trackpage`` and ``python -m trackpage``.

Commands report their own failures and exit through typer. Anything that still
escapes the application is rendered here as an error panel.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from trackpage.cli.app import app
from trackpage.cli.formatters import format_error_with_suggestions
from trackpage.exceptions import TrackpageError

log = logging.getLogger("trackpage")

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _use_utf8_streams() -> None:
    # Legacy Windows code pages cannot encode the status marks
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def report_error(error: BaseException, console: Console) -> int:
    """Prints an error that escaped the CLI and returns the exit status for it."""
    if isinstance(error, (KeyboardInterrupt, asyncio.CancelledError)):
        console.print("\n[yellow]Interrupted.[/yellow]")
        return EXIT_INTERRUPTED

    console.print()
    if isinstance(error, TrackpageError):
        console.print(format_error_with_suggestions(error))
    else:
        console.print(format_error_with_suggestions(error, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=error)
    return EXIT_FAILURE


def main() -> None:
    if os.name == "nt":
        _use_utf8_streams()

    try:
        app(prog_name="trackpage")
    except (typer.Exit, typer.Abort):
        return
    except (KeyboardInterrupt, asyncio.CancelledError, Exception) as e:
        sys.exit(report_error(e, Console(stderr=True)))


if __name__ == "__main__":
    main()
