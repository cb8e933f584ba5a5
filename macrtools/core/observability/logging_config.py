"""
Logging configuration: one setup call per process.

main.py configures the root logger once; every module logs through
``logger = logging.getLogger(__name__)``.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  MACRTOOLS_LOG_LEVEL  >  entry default

The macOS installer copies postinstall stderr into /var/log/install.log,
so the postinstall entry defaults to INFO and the interactive CLI to
WARNING. MACRTOOLS_LOG_FILE adds a second, timestamped log file with
its own level (MACRTOOLS_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "MACRTOOLS_LOG_LEVEL"
LOG_FILE_ENV = "MACRTOOLS_LOG_FILE"
LOG_FILE_LEVEL_ENV = "MACRTOOLS_LOG_FILE_LEVEL"

# (threshold, format, datefmt), checked in order; first threshold >= level wins
_CONSOLE_TIERS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d | %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = ("%(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(process)d] %(name)s:%(lineno)d | %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_TIERS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    fmt, datefmt = _CONSOLE_DEFAULT
    return logging.Formatter(fmt, datefmt=datefmt)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler and,
    optionally, a file handler.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Extra log file (appended to).
        log_file_level: Level for ``log_file``; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(file_level)
        to_file.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(to_file)
        # Root must let through whatever the more verbose handler wants
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    # A closed stderr (installer teardown) must not abort the run
    logging.raiseExceptions = False


def _parse_level(name: str | None) -> int:
    """Level name to number; empty or unknown names give WARNING."""
    value = logging.getLevelName(name.upper()) if name else None
    return value if isinstance(value, int) else logging.WARNING


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    default: str = "WARNING",
) -> str:
    """Pick the console level: CLI flag, then MACRTOOLS_LOG_LEVEL, then ``default``."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, default)


def setup_from_env(level: str) -> None:
    """``setup_logging`` with the file options taken from the environment."""
    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )
