"""
Logging configuration — set up once by the CLI before anything runs.

Every module logs through ``logging.getLogger(__name__)``. Status lines
are not log records: they go to stdout through click, while everything
configured here goes to stderr, so a piped report stays clean.

Level precedence:
    CLI flag  >  ZAPP_LOG_LEVEL env var  >  WARNING (default)

ZAPP_LOG_FILE / ZAPP_LOG_FILE_LEVEL add a file handler with full detail.
"""

from __future__ import annotations

import logging
import sys

# ── Format strings ──────────────────────────────────────────────

# WARNING and above — just the message
_FMT_PLAIN = "%(message)s"

# INFO — time and logger name
_FMT_INFO = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output — level and source line too
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Library loggers kept at WARNING unless we're debugging
_LIBRARY_LOGGERS = ("jinja2", "asyncio")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file.
        log_file_level: Level for the log file; defaults to ``level``.
        quiet_third_party: Hold library loggers at WARNING unless ``level``
            is DEBUG.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_CONSOLE)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_INFO, datefmt=_DATEFMT_CONSOLE)
    return logging.Formatter(_FMT_PLAIN)


def _parse_level(level: str | None) -> int:
    """Level name → numeric level. Unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
