"""Logging setup for dirdesk.

The screen belongs to the curses UI, so records only ever go to a rotating
log file.  Two named loggers are used throughout the package:

* ``dirdesk`` - parent of every module logger;
* ``dirdesk.keyevents`` - one DEBUG record per routed key event.

:func:`setup_logging` never raises.  When the configured file cannot be
opened it falls back to ``dirdesk.log`` in the system temp directory and
reports the problem on stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Dict, Optional

from dirdesk.config import get_logging_settings

logger = logging.getLogger("dirdesk")
KEY_LOGGER = logging.getLogger("dirdesk.keyevents")

LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-22s - %(message)s (%(filename)s:%(lineno)d)"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def _open_handler(filename: str) -> Optional[logging.Handler]:
    log_dir = os.path.dirname(filename)
    try:
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        return logging.handlers.RotatingFileHandler(
            filename, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
    except OSError as err:
        print(f"Error setting up log file '{filename}': {err}", file=sys.stderr)
        return None


def setup_logging(config: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Attach a rotating file handler to the ``dirdesk`` logger.

    Returns the path actually logged to, or ``None`` when no file could be
    opened.  Calling it again replaces the previous handler.
    """
    settings = get_logging_settings(config)
    level = getattr(logging, settings["level"], logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING

    filename = settings["file"]
    handler = _open_handler(filename)
    if handler is None:
        filename = os.path.join(tempfile.gettempdir(), "dirdesk.log")
        print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
        handler = _open_handler(filename)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.setLevel(level)
    logger.propagate = False
    if handler is None:
        logger.addHandler(logging.NullHandler())
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    return filename


__all__ = ["KEY_LOGGER", "logger", "setup_logging"]
