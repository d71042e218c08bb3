"""Structured exception hierarchy for SonicViz

Every failure in the capture → smoothing → render pipeline is one of three
kinds: configuration (reported once, operation aborted), resource (recorder
auto-stops, visualization continues) or permission (setup skipped until
granted). None of them is fatal to the host application.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification"""

    CONFIGURATION = "configuration"
    CAPTURE = "capture"
    RESOURCE = "resource"
    PERMISSION = "permission"
    LIFECYCLE = "lifecycle"
    PLAYBACK = "playback"
    SYSTEM = "system"


class VisualizerError(Exception):
    """Base exception for SonicViz

    Provides structured error information including:
    - Error codes for programmatic handling
    - Context information for debugging
    - Severity levels for appropriate response
    - Recovery suggestions for user guidance
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.original_exception = original_exception
        self.timestamp = time.time()
        self.error_code = error_code or self._generate_error_code()

        if "component" not in self.context:
            self.context["component"] = self.__class__.__name__

    def _generate_error_code(self) -> str:
        class_name = self.__class__.__name__
        return f"{class_name.upper()}_{int(self.timestamp)}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
            "original_exception": str(self.original_exception)
            if self.original_exception
            else None,
        }

    def get_user_message(self) -> str:
        """Get user-friendly error message with recovery suggestions"""
        user_msg = self.message
        if self.recovery_suggestions:
            suggestions = "\n".join(
                f"• {suggestion}" for suggestion in self.recovery_suggestions
            )
            user_msg += f"\n\nSuggested actions:\n{suggestions}"
        return user_msg

    def is_recoverable(self) -> bool:
        return (
            len(self.recovery_suggestions) > 0
            and self.severity != ErrorSeverity.CRITICAL
        )


# =============================================================================
# Capture Exceptions
# =============================================================================


class CaptureConfigurationError(VisualizerError):
    """采集参数错误（例如 capture size 不是 2 的幂）"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=kwargs.pop("severity", ErrorSeverity.HIGH),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ["Use a power-of-two capture size such as 128, 256 or 512"],
            ),
            **kwargs,
        )


class CaptureSessionError(VisualizerError):
    """音频会话无效或已关闭"""

    def __init__(self, message: str, session_id: Optional[int] = None, **kwargs):
        context = kwargs.pop("context", {})
        context.setdefault("session_id", session_id)
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            context=context,
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ["Start playback before attaching the visualizer"],
            ),
            **kwargs,
        )
        self.session_id = session_id


class CaptureStateError(VisualizerError):
    """采集对象处于不允许该操作的状态"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CAPTURE,
            severity=kwargs.pop("severity", ErrorSeverity.LOW),
            **kwargs,
        )


# =============================================================================
# Resource / Permission Exceptions
# =============================================================================


class RecordingError(VisualizerError):
    """波形数据文件读写异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.RESOURCE,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Check free disk space",
                    "Verify the recording directory is writable",
                ],
            ),
            **kwargs,
        )


class PermissionDeniedError(VisualizerError):
    """缺少采集或存储权限"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.PERMISSION,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ["Grant audio capture and storage permissions, then resume playback"],
            ),
            **kwargs,
        )


def wrap_exception(
    exception: Exception,
    message: Optional[str] = None,
    category: ErrorCategory = ErrorCategory.SYSTEM,
) -> VisualizerError:
    """Wrap a foreign exception so it can travel through the error channel"""
    if isinstance(exception, VisualizerError):
        return exception

    return VisualizerError(
        message=message or f"Unexpected {type(exception).__name__}: {exception}",
        category=category,
        original_exception=exception,
    )


__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "VisualizerError",
    "CaptureConfigurationError",
    "CaptureSessionError",
    "CaptureStateError",
    "RecordingError",
    "PermissionDeniedError",
    "wrap_exception",
]
