"""Rich console logging for the nutriplan CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

stderr_console = Console(stderr=True)

FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def resolve_level(level: str | int) -> int:
    """Map "debug"/"INFO"/10 style levels to a logging constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(level: str | int = "info", log_file: Path | None = None) -> logging.Logger:
    """Route the nutriplan logger to stderr through Rich, plus an optional file.

    Calling it again replaces the previously installed handlers.
    """
    from rich.logging import RichHandler

    console_level = resolve_level(level)
    logger = logging.getLogger("nutriplan")
    logger.handlers.clear()

    console_handler = RichHandler(
        console=stderr_console,
        level=console_level,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logger.addHandler(console_handler)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    # The file always gets debug output
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)
    return logger
