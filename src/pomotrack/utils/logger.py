"""Application-wide logger writing to platformdirs user_log_dir.

Library modules log through ``logging.getLogger(__name__)``; those loggers
are children of the ``pomotrack`` logger configured here, so nothing is
written anywhere until the CLI calls :func:`get_logger`.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomotrack"
_LOG_FILE = "pomotrack.log"
_LEVEL_ENV = "POMOTRACK_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    The level comes from ``POMOTRACK_LOG_LEVEL`` (default INFO).
    """
    global _logger
    if _logger is not None:
        return _logger

    log_dir = log_dir or Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    level = os.environ.get(_LEVEL_ENV, "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def reset_logger() -> None:
    """Detach handlers and forget the singleton (used by tests)."""
    global _logger
    if _logger is not None:
        for handler in list(_logger.handlers):
            _logger.removeHandler(handler)
            handler.close()
    _logger = None
