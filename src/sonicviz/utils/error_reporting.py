"""Consistent error reporting

The ErrorReporter is the caller-visible channel every component reports to:
errors are recorded, logged and handed to subscribed handlers. Nothing here
re-raises, so a failing capture or recording degrades to "no visualization"
or "no recording" without touching playback.
"""

import threading
import traceback
from typing import Any, Callable, Dict, List, Optional, Union

from .exceptions import ErrorSeverity, VisualizerError, wrap_exception
from .unified_logger import app_logger

ErrorHandler = Callable[[VisualizerError], None]


class ErrorReporter:
    """Centralized error reporting"""

    def __init__(self, max_error_history: int = 100):
        self._max_error_history = max_error_history
        self._error_history: List[Dict[str, Any]] = []
        self._handlers: List[ErrorHandler] = []
        self._lock = threading.RLock()

    def subscribe(self, handler: ErrorHandler) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def unsubscribe(self, handler: ErrorHandler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def report_error(
        self,
        error: Union[Exception, VisualizerError],
        component: str = "unknown",
        context: Optional[Dict[str, Any]] = None,
    ) -> VisualizerError:
        """Record, log and dispatch an error

        Args:
            error: Exception or VisualizerError to report
            component: Component where error occurred
            context: Additional context information

        Returns:
            The (possibly wrapped) VisualizerError that was dispatched
        """
        if not isinstance(error, VisualizerError):
            error = wrap_exception(error)

        if context:
            error.context.update(context)
        error.context["reporting_component"] = component

        self._record_error(error, component)
        self._log_error(error, component)

        with self._lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(error)
            except Exception as handler_error:
                app_logger.log_error(handler_error, "error_handler_callback")

        return error

    def _record_error(self, error: VisualizerError, component: str) -> None:
        with self._lock:
            error_record = {
                **error.to_dict(),
                "component": component,
                "stack_trace": "".join(
                    traceback.format_exception(
                        type(error.original_exception),
                        error.original_exception,
                        error.original_exception.__traceback__,
                    )
                )
                if error.original_exception
                else None,
            }

            self._error_history.append(error_record)

            if len(self._error_history) > self._max_error_history:
                self._error_history = self._error_history[-self._max_error_history:]

    def _log_error(self, error: VisualizerError, component: str) -> None:
        if error.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
            app_logger.log_error(error, f"{error.severity.name}_{component}", error.to_dict())
        else:
            app_logger.log_warning(f"Error in {component}: {error.message}", error.to_dict())

    def get_error_history(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._error_history)

    def clear_history(self) -> None:
        with self._lock:
            self._error_history.clear()


_global_error_reporter: Optional[ErrorReporter] = None
_reporter_lock = threading.RLock()


def get_error_reporter() -> ErrorReporter:
    """Get the process-wide error reporter"""
    global _global_error_reporter
    with _reporter_lock:
        if _global_error_reporter is None:
            _global_error_reporter = ErrorReporter()
        return _global_error_reporter
