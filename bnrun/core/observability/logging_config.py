"""
Logging configuration — one-time setup for the ``bnrun`` CLI.

Every module logs through ``logging.getLogger(__name__)``; this module
decides where those records go.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  BNRUN_LOG_LEVEL  >  WARNING

At INFO the planner prints its expansion tree, so console lines stay
bare (no timestamps) to keep the indentation readable. DEBUG adds
logger name and line number.

Optional file output via BNRUN_LOG_FILE / BNRUN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

# ── Format strings ──────────────────────────────────────────────

# WARNING / INFO: bare message, the planning tree carries its own layout
_FMT_CONSOLE = "%(message)s"

# DEBUG: where each line came from
_FMT_DEBUG = "%(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "BNRUN_LOG_LEVEL"
LOG_FILE_ENV = "BNRUN_LOG_FILE"
LOG_FILE_LEVEL_ENV = "BNRUN_LOG_FILE_LEVEL"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the file handler; defaults to ``level``.
    """
    console_level = parse_level(level)
    fmt = _FMT_DEBUG if console_level <= logging.DEBUG else _FMT_CONSOLE

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective = console_level
    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        effective = min(effective, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
