# core/logging_config.py

"""
The "sigeg" logger shared by every module.

Level comes from settings.LOG_LEVEL; an unknown level name
falls back to INFO instead of failing at import time.
"""

import logging

from core.config import settings

LOGGER_NAME = "sigeg"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(name: str) -> int:
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(level_name: str = settings.LOG_LEVEL) -> logging.Logger:
    sigeg_logger = logging.getLogger(LOGGER_NAME)
    sigeg_logger.setLevel(resolve_level(level_name))

    # Uvicorn --reload re-imports modules; attach the handler once
    if not any(getattr(h, "_sigeg", False) for h in sigeg_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sigeg = True
        sigeg_logger.addHandler(handler)

    return sigeg_logger


logger = setup_logger()
