# homeloan/logs.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "homeloan"
DEBUG_LOG_PATH = os.path.join("logs", "homeloan_debug.log")

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def debug_enabled() -> bool:
    return os.getenv("HOMELOAN_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(debug: bool | None = None) -> logging.Logger:
    """
    Attach handlers to the package logger (idempotent).

    - stderr handler: WARNING, or DEBUG when debug is on
    - rotating file handler at logs/homeloan_debug.log when debug is on
    """
    if debug is None:
        debug = debug_enabled()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    # Avoid duplicate handlers if called again from tests/REPL
    if not any(getattr(h, "_homeloan", False) for h in logger.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        stream._homeloan = True  # type: ignore[attr-defined]
        logger.addHandler(stream)

    for h in logger.handlers:
        if getattr(h, "_homeloan", False):
            h.setLevel(logging.DEBUG if debug else logging.WARNING)

    if debug and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        try:
            os.makedirs(os.path.dirname(DEBUG_LOG_PATH), exist_ok=True)
            handler = RotatingFileHandler(DEBUG_LOG_PATH, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        except OSError as exc:
            logger.warning("debug log file unavailable: %s", exc)
        else:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger
