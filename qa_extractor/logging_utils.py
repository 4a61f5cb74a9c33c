"""Logging utilities.

Use `configure_logging()` from entrypoints/scripts to get consistent formatting.
Library modules only create named loggers (`qa_extractor.<module>`).
"""

from __future__ import annotations

import logging
from typing import Optional


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _parse_level(level: str) -> int:
    if not isinstance(level, str) or not level.strip():
        raise ValueError("log level must be a non-empty string (e.g., 'INFO', 'DEBUG')")
    name = level.strip().upper()
    if name in _LEVELS:
        return _LEVELS[name]
    # Also accept numeric levels like "20"
    try:
        return int(name)
    except ValueError as e:
        raise ValueError(f"Unknown log level: {level!r}") from e


def configure_logging(level: str = "INFO", logger_name: Optional[str] = None) -> logging.Logger:
    """Configure console logging with a consistent format.

    Safe to call multiple times: an existing stream handler is reused.
    """
    target = logging.getLogger(logger_name) if logger_name else logging.getLogger()
    target.setLevel(_parse_level(level))

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for h in list(target.handlers):
        if isinstance(h, logging.StreamHandler):
            h.setFormatter(formatter)
            h.setLevel(target.level)
            return target

    handler = logging.StreamHandler()
    handler.setLevel(target.level)
    handler.setFormatter(formatter)
    target.addHandler(handler)
    return target
