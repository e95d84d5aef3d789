import logging
import sys
from typing import Dict, Optional

from .settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Every logger handed out by get_logger, so an app can retune them all at once
_service_loggers: Dict[str, logging.Logger] = {}

def resolve_level(level_name: str) -> int:
    """Map a level name such as "warning" to its logging constant, INFO if unknown."""
    return getattr(logging, level_name.upper(), logging.INFO)

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Configures and returns a logger writing to stdout.

    The level defaults to settings.log_level and can be changed later for
    every service logger with set_log_level.
    """
    if level is None:
        level = resolve_level(settings.log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Only attach once, get_logger is called at import time by every module
    if not logger.handlers:
        logger.addHandler(handler)

    _service_loggers[name] = logger
    return logger

def set_log_level(level_name: str) -> int:
    """
    Apply a level to every service logger and its handlers.

    Called by create_app with that app's Settings.log_level, so an app built
    with LOG_LEVEL=WARNING stops emitting per-request INFO lines.
    """
    level = resolve_level(level_name)
    for logger in _service_loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    return level
