"""统一日志系统 - 单一接口，按类别路由

SonicViz 的统一日志系统，提供：
- 单一清晰的API接口
- 控制台 + 文件双路输出
- 按类别过滤（capture / recorder / animation / ...）
- 即时无缓冲输出

使用示例:
    from sonicviz.utils import app_logger

    app_logger.log_capture_event("Capture enabled", {"interval_ms": 100})
    app_logger.log_error(e, "recorder_append")
"""

import json
import os
import sys
import threading
import time
import traceback
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class LogLevel(Enum):
    """日志级别"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """日志类别（用于过滤和路由）"""
    CAPTURE = "capture"
    RECORDER = "recorder"
    ANIMATION = "animation"
    RENDER = "render"
    LIFECYCLE = "lifecycle"
    PLAYBACK = "playback"
    CONFIG = "config"
    STARTUP = "startup"
    ERROR = "error"
    PERFORMANCE = "performance"


def _default_log_dir() -> Path:
    override = os.getenv("SONICVIZ_LOG_DIR")
    if override:
        return Path(override)
    return Path(os.getenv("APPDATA", ".")) / "SonicViz" / "logs"


class UnifiedLogger:
    """统一日志系统 - 单例模式"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._config_service = None  # 延迟设置
        self._min_level = LogLevel.DEBUG if self._is_dev_mode() else LogLevel.INFO
        self._console_output_enabled = False
        self._enabled_categories = set(LogCategory)
        self._lock = threading.RLock()
        self._log_file: Optional[Path] = None
        self.set_log_dir(_default_log_dir())

    @staticmethod
    def _is_dev_mode() -> bool:
        """检查是否为开发模式"""
        return "--dev" in sys.argv or bool(os.getenv("SONICVIZ_DEV"))

    def set_log_dir(self, log_dir: Union[str, Path]) -> None:
        """切换日志目录，目录不可写时只保留控制台输出"""
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_file = log_dir / 'app.log'
        except OSError as e:
            self._log_file = None
            print(f"[LOG WARNING] Log directory unavailable ({log_dir}): {e}", file=sys.stderr)

    @property
    def log_file(self) -> Optional[Path]:
        return self._log_file

    def set_config_service(self, config_service) -> None:
        """设置配置服务并从配置中加载日志设置

        Args:
            config_service: 任何提供 get_setting(key, default) 的对象
        """
        self._config_service = config_service
        self._load_settings_from_config()

    def _load_settings_from_config(self) -> None:
        if not self._config_service:
            return

        try:
            level_str = self._config_service.get_setting("logging.level", "INFO")
            self._min_level = self._string_to_log_level(level_str)

            self._console_output_enabled = bool(
                self._config_service.get_setting("logging.console_output", False)
            )

            enabled = self._config_service.get_setting("logging.enabled_categories", [])
            if enabled:
                self._enabled_categories = set(LogCategory(cat) for cat in enabled)
            else:
                self._enabled_categories = set(LogCategory)

        except (ValueError, TypeError) as e:
            print(f"[LOG WARNING] Failed to load logger settings from config: {e}", file=sys.stderr)

    @staticmethod
    def _string_to_log_level(level_str: str) -> LogLevel:
        try:
            return LogLevel[str(level_str).upper()]
        except KeyError:
            return LogLevel.INFO

    def set_log_level(self, level: Union[str, LogLevel]) -> None:
        """动态修改日志级别"""
        with self._lock:
            if isinstance(level, str):
                self._min_level = self._string_to_log_level(level)
            else:
                self._min_level = level

    def set_console_output(self, enabled: bool) -> None:
        with self._lock:
            self._console_output_enabled = enabled

    def set_enabled_categories(self, categories: List[LogCategory]) -> None:
        with self._lock:
            self._enabled_categories = set(categories)

    def get_log_level(self) -> LogLevel:
        return self._min_level

    def is_debug_enabled(self) -> bool:
        return self._min_level == LogLevel.DEBUG

    def _should_log(self, level: LogLevel) -> bool:
        return level.value >= self._min_level.value

    def _format_console_message(self, level: LogLevel, category: LogCategory,
                                message: str, context: Dict[str, Any] = None) -> str:
        timestamp = time.strftime('%H:%M:%S')

        colors = {
            LogLevel.DEBUG: '\033[36m',    # Cyan
            LogLevel.INFO: '\033[32m',     # Green
            LogLevel.WARNING: '\033[33m',  # Yellow
            LogLevel.ERROR: '\033[31m',    # Red
            LogLevel.CRITICAL: '\033[35m'  # Magenta
        }
        reset = '\033[0m'
        color = colors.get(level, '')

        parts = [f"[{timestamp}] {color}{level.name}{reset} | {category.value} | {message}"]

        if context and category in (LogCategory.CAPTURE, LogCategory.RECORDER, LogCategory.PERFORMANCE):
            context_str = " | ".join(f"{key}: {value}" for key, value in context.items())
            if context_str:
                parts.append(f"\n  {context_str}")

        return "".join(parts)

    @staticmethod
    def _safe_json_serialize(obj):
        """安全的 JSON 序列化，处理枚举、路径和 numpy 标量"""
        if hasattr(obj, 'value') and hasattr(obj, 'name'):
            return f"{type(obj).__name__}.{obj.name}"
        if hasattr(obj, 'item'):
            return obj.item()
        return str(obj)

    def _format_file_message(self, level: LogLevel, category: LogCategory,
                             message: str, context: Dict[str, Any] = None,
                             component: str = None) -> str:
        timestamp = time.strftime('%Y-%m-%d %H:%M:%S')

        parts = [timestamp, level.name.ljust(8), category.value.ljust(10)]
        if component:
            parts.append(f"[{component}]")
        parts.append(message)

        if context:
            context_json = json.dumps(context, ensure_ascii=False,
                                      separators=(',', ':'),
                                      default=self._safe_json_serialize)
            parts.append(f"| {context_json}")

        return " | ".join(parts)

    def _write_log(self, level: LogLevel, category: LogCategory, message: str,
                   context: Dict[str, Any] = None, component: str = None) -> None:
        """写入日志（控制台 + 文件）"""
        if category != LogCategory.PERFORMANCE and not self._should_log(level):
            return

        if category not in self._enabled_categories:
            return

        with self._lock:
            if self._console_output_enabled or level.value >= LogLevel.WARNING.value:
                console_msg = self._format_console_message(level, category, message, context)
                output_stream = sys.stderr if level.value >= LogLevel.ERROR.value else sys.stdout
                print(console_msg, file=output_stream, flush=True)

            if self._log_file is None:
                return

            try:
                file_msg = self._format_file_message(level, category, message, context, component)
                with open(self._log_file, 'a', encoding='utf-8') as f:
                    f.write(file_msg + '\n')
            except OSError as e:
                print(f"[LOG ERROR] Failed to write to log file: {e}", file=sys.stderr)

    # ============ 公开API ============

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.DEBUG, category, message, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.INFO, category, message, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.WARNING, category, message, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        ctx = dict(context or {})
        if exception:
            ctx['exception'] = str(exception)
            ctx['exception_type'] = type(exception).__name__
        self._write_log(LogLevel.ERROR, category, message, ctx, component)

    def critical(self, message: str, exception: Exception = None,
                 category: LogCategory = LogCategory.ERROR,
                 context: Dict[str, Any] = None, component: str = None) -> None:
        ctx = dict(context or {})
        if exception:
            ctx['exception'] = str(exception)
            ctx['exception_type'] = type(exception).__name__
        self._write_log(LogLevel.CRITICAL, category, message, ctx, component)

    def performance(self, operation: str, duration: float,
                    details: Dict[str, Any] = None) -> None:
        """记录性能指标"""
        ctx = dict(details or {})
        ctx['duration'] = f"{duration:.3f}s"
        self.info(f"Performance: {operation} - {duration:.3f}s",
                  LogCategory.PERFORMANCE, ctx, "performance")


# ============ 全局单例和兼容接口 ============

logger = UnifiedLogger()


class LegacyLoggerAdapter:
    """按组件分类的便捷接口（app_logger）"""

    def __init__(self, logger_instance: UnifiedLogger):
        self._logger = logger_instance

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.debug(message, category, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.info(message, category, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.warning(message, category, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.error(message, exception, category, context, component)

    def log_capture_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Capture: {event}", LogCategory.CAPTURE, details, "capture")

    def log_recorder_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Recorder: {event}", LogCategory.RECORDER, details, "recorder")

    def log_animation_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.debug(f"Animation: {event}", LogCategory.ANIMATION, details, "animation")

    def log_lifecycle_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Lifecycle: {event}", LogCategory.LIFECYCLE, details, "lifecycle")

    def log_playback_event(self, event: str, details: Dict[str, Any] = None,
                           level: str = "INFO") -> None:
        log_func = getattr(self._logger, level.lower(), self._logger.info)
        log_func(f"Playback: {event}", LogCategory.PLAYBACK, details, "playback")

    def log_warning(self, message: str, details: Dict[str, Any] = None) -> None:
        self._logger.warning(message, LogCategory.ERROR, details)

    def log_error(self, error: Exception, context: str,
                  details: Dict[str, Any] = None) -> None:
        tb_str = ''.join(traceback.format_exception(type(error), error, error.__traceback__))

        ctx = {'traceback': tb_str, 'error_details': str(error)}
        if details:
            ctx.update(details)
        self._logger.error(f"Error in {context}", error, LogCategory.ERROR,
                           context=ctx, component=context)

    def is_debug_enabled(self) -> bool:
        return self._logger.is_debug_enabled()


app_logger = LegacyLoggerAdapter(logger)


__all__ = [
    'logger',
    'app_logger',
    'UnifiedLogger',
    'LogLevel',
    'LogCategory',
]
