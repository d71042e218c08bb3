"""Utilities: unified logging, exceptions and error reporting"""

from .exceptions import *  # noqa: F403, F401
from .unified_logger import (  # noqa: F401
    logger,
    app_logger,
    UnifiedLogger,
    LogLevel,
    LogCategory,
)
from .error_reporting import ErrorReporter, get_error_reporter  # noqa: F401
