"""Logging helpers; every metascan message goes to stderr or a log file."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "metascan"
CONSOLE_FORMAT = "[metascan] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``metascan`` or one of its children, e.g. ``metascan.backends``."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _with_format(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``metascan`` hierarchy.

    Handlers installed by an earlier call are replaced, so the CLI can run
    several times in one process. Stdout is never written to; it carries the
    metadata document.
    """
    level = _level(verbose, quiet)
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_with_format(logging.StreamHandler(sys.stderr), CONSOLE_FORMAT, level))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _with_format(logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT, level)
        )
    return logger


__all__ = ["configure_logging", "get_logger"]
