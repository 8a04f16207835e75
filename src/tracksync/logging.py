"""Logging for tracksync.

All components log under the ``tracksync`` logger. ``setup_logging`` sends
those records to a rotating file (and optionally stderr), with YouTrack
tokens masked before anything is written.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "tracksync"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "tracksync.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SECRET_PATTERNS = [
    # YouTrack permanent tokens: perm:<base64 user>.<base64 name>.<secret>
    (re.compile(r"perm:[A-Za-z0-9+/=._-]+"), "perm:[REDACTED]"),
    (re.compile(r"Bearer [A-Za-z0-9+/=._:-]+"), "Bearer [REDACTED]"),
    (re.compile(r"token=[A-Za-z0-9+/=._:-]+"), "token=[REDACTED]"),
]


def sanitize_for_log(text: str) -> str:
    """Mask YouTrack tokens and Authorization values in text.

    Args:
        text: Text that may contain a token, e.g. an exception message.

    Returns:
        The text with every secret replaced by a ``[REDACTED]`` marker.
    """
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Handler filter that masks secrets in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = sanitize_for_log(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _configure_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RedactingFilter())
    return handler


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Route tracksync logs to a rotating file.

    Calling it again replaces the previous handlers, so the CLI and the
    API server can both call it in one process.

    Args:
        log_dir: Directory for the log file. Falls back to TRACKSYNC_LOG_DIR,
            then 'logs' under the working directory.
        log_file: Log file name.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: Level name. Falls back to TRACKSYNC_LOG_LEVEL, then INFO.
            Unknown names mean INFO.
        console: Also log to stderr.

    Returns:
        The ``tracksync`` logger.
    """
    log_path = Path(log_dir or os.environ.get("TRACKSYNC_LOG_DIR") or DEFAULT_LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    level_name = (level or os.environ.get("TRACKSYNC_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    log_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(
        _configure_handler(
            RotatingFileHandler(
                log_path / log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            ),
            log_level,
        )
    )
    if console:
        logger.addHandler(_configure_handler(logging.StreamHandler(), log_level))

    logger.debug("Logging to %s at %s", log_path / log_file, level_name)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("api")`` -> ``tracksync.api``."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
