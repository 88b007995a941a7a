from __future__ import annotations

import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import config

_LOG_NAME = "cardtracker.log"


def ensure_log_dir(log_dir: Optional[str] = None) -> str:
    path = log_dir or config.LOG_DIR
    os.makedirs(path, exist_ok=True)
    return path


def log_file_path(log_dir: Optional[str] = None) -> str:
    return os.path.join(ensure_log_dir(log_dir), _LOG_NAME)


def setup_logging(level: int = logging.DEBUG, log_dir: Optional[str] = None) -> logging.Logger:
    """Configure a rotating file logger plus an INFO console handler.

    Returns the package logger ("cardtracker"). Safe to call twice.
    """
    logger = logging.getLogger("cardtracker")
    logger.setLevel(level)

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        try:
            fhandler = RotatingFileHandler(log_file_path(log_dir), maxBytes=512_000, backupCount=3, encoding="utf-8")
        except OSError as e:
            # Console logging still works without a writable log directory
            sys.stderr.write(f"[WARN] File logging disabled: {e}\n")
        else:
            fhandler.setLevel(logging.DEBUG)
            fhandler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
            logger.addHandler(fhandler)

    # RotatingFileHandler is itself a StreamHandler subclass
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)

    logger.debug("Logging initialized")
    return logger


def install_excepthook(logger: Optional[logging.Logger] = None) -> None:
    """Install a sys.excepthook that logs uncaught exceptions with traceback."""
    lg = logger or logging.getLogger("cardtracker")

    def _hook(exc_type, exc, tb):
        lg.error("Uncaught exception:")
        for line in traceback.format_exception(exc_type, exc, tb):
            lg.error(line.rstrip())
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _hook
