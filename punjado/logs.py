"""Logging setup.

The package logs through ``logging.getLogger(__name__)`` everywhere and is
silent by default. Setting ``PUNJADO_DEBUG=true`` sends debug output to a
file, since the terminal itself belongs to the TUI.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEBUG_ENV_VAR = "PUNJADO_DEBUG"
DEBUG_LOG_FILENAME = "debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger("punjado").addHandler(logging.NullHandler())


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(log_path: Path | None = None) -> logging.Handler | None:
    """Attach a debug file handler to the package logger when enabled.

    Returns the handler so callers (and tests) can detach it again.
    """
    if log_path is None:
        if not debug_enabled():
            return None
        log_path = Path.cwd() / DEBUG_LOG_FILENAME

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("punjado")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler
