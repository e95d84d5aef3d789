from .settings import Settings, settings
from .logging_utils import get_logger, set_log_level
from .instrumentation_utils import instrument_app

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "set_log_level",
    "instrument_app",
]
