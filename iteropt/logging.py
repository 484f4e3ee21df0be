"""Logging for iteropt.

Every logger lives under the ``iteropt.`` namespace, writes to a single
configurable stream (stderr by default) and does not propagate to the root
logger. The starting level comes from the ``ITEROPT_LOG_LEVEL`` environment
variable and defaults to WARNING.

Example:
    >>> from iteropt.logging import get_logger, log_level
    >>> logger = get_logger(__name__)
    >>> with log_level("DEBUG"):
    ...     logger.debug("bracket updated")
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

_LEVEL_ENV_VAR = "ITEROPT_LOG_LEVEL"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_ROOT = "iteropt"


def _parse_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


# Settings applied to loggers created later on
_level: int = _parse_level(os.getenv(_LEVEL_ENV_VAR, "WARNING"))
_format: str = _DEFAULT_FORMAT
_stream: Optional[object] = None

_loggers: dict[str, logging.Logger] = {}


def _attach_handler(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))
    logger.addHandler(handler)
    logger.setLevel(_level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name``.

    Args:
        name: Usually ``__name__``. Names outside the ``iteropt`` namespace
            are prefixed with ``iteropt.``; ``None`` gives the package logger.
    """
    if name is None:
        name = _ROOT
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        _attach_handler(logger)
        _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every iteropt logger, including future ones."""
    global _level
    _level = _parse_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Set level, format and output stream of all iteropt loggers.

    Loggers created afterwards pick up the same settings.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format; defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).
    """
    global _level, _format, _stream
    _level = _parse_level(level)
    _format = format_string or _DEFAULT_FORMAT
    _stream = stream
    for logger in _loggers.values():
        _attach_handler(logger)


@contextmanager
def log_level(level: int | str) -> Iterator[None]:
    """Temporarily change the level of all iteropt loggers."""
    previous = _level
    set_log_level(level)
    try:
        yield
    finally:
        set_log_level(previous)


__all__ = ["configure_logging", "get_logger", "log_level", "set_log_level"]
