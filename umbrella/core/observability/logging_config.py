"""
Logging configuration for the ``umbrella`` command.

Called once by ``umbrella.main.cli``. Only the ``umbrella`` logger tree is
configured, so embedding the services in another build tool leaves that
tool's root logger alone.

Level:  --debug > --verbose > --quiet > UMBRELLA_LOG_LEVEL > WARNING
File:   UMBRELLA_LOG_FILE, at UMBRELLA_LOG_FILE_LEVEL (default: same level)

Console records go to stderr, next to the ``Failed:`` diagnostics, so
``--json`` output on stdout stays parseable at any level.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "umbrella"

# Build logs read like the other tool output: "umbrella: Scanned 42 header(s) ..."
_FMT_CONSOLE = "umbrella: %(message)s"
# --debug adds level and logger, e.g. umbrella.core.services.header_scan
_FMT_DEBUG = "umbrella: %(levelname)s %(name)s: %(message)s"
_FMT_FILE = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``umbrella`` logger.

    Safe to call more than once; previous handlers are replaced.
    """
    console_level = _parse_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(_FMT_DEBUG if console_level <= logging.DEBUG else _FMT_CONSOLE)
    )
    logger.addHandler(console)

    effective = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE))
        logger.addHandler(fh)
        effective = min(effective, file_level)

    logger.setLevel(effective)
    logger.propagate = False
    return logger


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; anything unknown means WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
