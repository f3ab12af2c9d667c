"""
Logging configuration — one setup call per process.

Called by the CLI group callback before any subcommand runs. Modules
log through ``logging.getLogger(__name__)``, all under the ``toolshim``
namespace, so only that subtree is configured. Wrapped tools write
straight to the terminal and never pass through logging.

Levels are resolved in precedence order:
    CLI flag  >  TOOLSHIM_LOG_LEVEL env var  >  WARNING (default)

Optional file output via TOOLSHIM_LOG_FILE / TOOLSHIM_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAMESPACE = "toolshim"

# WARNING and above: just the message, prefixed so it is clearly not the tool talking
_FMT_MINIMAL = "toolshim: %(message)s"

# INFO: timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG: file:line and thread (the update checker runs off the main thread)
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(threadName)s %(name)s:%(lineno)d — %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Configure the ``toolshim`` logger tree.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Level for the file; defaults to ``level``.

    Returns:
        The configured namespace logger.
    """
    console_level = parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_VERBOSE
    elif console_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(console)
    logger.propagate = False

    effective = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        effective = min(effective, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)

    logger.setLevel(effective)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
    return logger


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
