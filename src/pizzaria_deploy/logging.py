"""Logging configuration for pizzaria-deploy."""

import logging
from enum import IntEnum
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def _file_handler(log_file: Path) -> logging.Handler | None:
    """Create the handler mirroring records to log_file, or None if unwritable."""
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
    debug: bool = False,
    log_file: Path | None = None,
) -> Console:
    """Configure logging based on CLI options.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug)
        quiet: Suppress non-error output (takes precedence over debug/verbosity)
        no_color: Disable colored output
        stream: Output stream for logs (stderr when None)
        debug: Enable debug logging (ignored if quiet is set)
        log_file: File every record is mirrored to, with timestamps

    Returns:
        Configured Rich console for output

    Note:
        Flag precedence: quiet > debug > verbosity. The log file receives
        the same records as the console.
    """
    if quiet:
        level = LogLevel.QUIET
    elif debug or verbosity >= 1:
        level = LogLevel.VERBOSE
    else:
        level = LogLevel.NORMAL

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=not no_color,
        no_color=no_color,
    )

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            show_time=True,
            show_path=debug or verbosity >= 2,
        )
    ]

    file_handler = None
    if log_file is not None:
        file_handler = _file_handler(log_file)
        if file_handler is not None:
            handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )

    if log_file is not None and file_handler is None:
        logging.getLogger(__name__).warning(
            "Cannot write log file %s, logging to console only", log_file
        )

    return console
