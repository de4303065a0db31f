"""
Logging configuration — set up once by the CLI entrypoint.

Every module logs through ``logging.getLogger(__name__)``; this only
decides where records go and how they look.

Level precedence:
    --debug / --verbose / --quiet  >  VMDEPS_LOG_LEVEL  >  WARNING

VMDEPS_LOG_FILE adds a file handler (level from VMDEPS_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import sys

# WARNING and above — the message only
_FMT_CONSOLE = "%(message)s"

# INFO — which component is talking
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output — file:line included
_FMT_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the file handler; defaults to ``level``.
    """
    console_level = parse_level(level)

    if console_level <= logging.DEBUG:
        console_fmt = logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT_SHORT)
    elif console_level <= logging.INFO:
        console_fmt = logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_SHORT)
    else:
        console_fmt = logging.Formatter(_FMT_CONSOLE)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)


def parse_level(level: str | None) -> int:
    """Map a level name to its numeric value; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
