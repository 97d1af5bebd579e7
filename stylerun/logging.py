"""Logging setup for stylerun runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "stylerun"
_CONSOLE_FORMAT = "[stylerun] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger below ``stylerun`` (``stylerun.<name>`` when named)."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _reset_handlers(logger: logging.Logger) -> None:
    # A previous run in the same process may still hold an open log file.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send stylerun diagnostics to stderr and, with ``log_file``, append them to a file.

    Console and file share one level: DEBUG when ``verbose``, INFO otherwise.
    Raises ``OSError`` when the log file cannot be opened.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        fmt = _FILE_FORMAT if isinstance(handler, logging.FileHandler) else _CONSOLE_FORMAT
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
