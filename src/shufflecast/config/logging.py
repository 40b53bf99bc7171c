"""Logging setup for ShuffleCast hosts."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "shufflecast"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    verbose: bool = False,
    log_file: Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; previously installed handlers are replaced.

    Args:
        level: Log level name used when not verbose
        verbose: Force DEBUG level
        log_file: Optional file to mirror log records into
        console: Rich console for terminal output (stderr by default)

    Returns:
        The configured ``shufflecast`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    effective = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(effective, int):
        effective = logging.INFO
    logger.setLevel(effective)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(effective)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(effective)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
