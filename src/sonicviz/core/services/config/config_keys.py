"""配置键常量定义 - 类型安全的配置访问

使用示例:
    reader.get_setting(ConfigKeys.CAPTURE_SIZE)
    reader.get_setting(ConfigKeys.ANIMATION_DURATION_MS)
"""


class ConfigKeys:
    """配置键常量类 - 所有配置路径的中央定义"""

    # ==================== Capture (采集配置) ====================
    CAPTURE_SIZE = "capture.size"
    """每帧采样点数 (int): 必须是2的幂次"""

    CAPTURE_FRAME_RATE_HINT_MHZ = "capture.frame_rate_hint_mhz"
    """期望采集率 (int | None): 毫赫兹，None 表示使用平台最大值"""

    CAPTURE_MAX_RATE_MHZ = "capture.max_capture_rate_mhz"
    """平台最大采集率 (int): 毫赫兹"""

    # ==================== Animation (动画配置) ====================
    ANIMATION_DURATION_MS = "animation.duration_ms"
    """平滑动画时长 (int): 毫秒"""

    ANIMATION_FRAME_INTERVAL_MS = "animation.frame_interval_ms"
    """动画刷新间隔 (int): 毫秒"""

    ANIMATION_ROTATION_PERIOD_MS = "animation.rotation_period_ms"
    """旋转一周所需时间 (int): 毫秒"""

    ANIMATION_POINTS = "animation.animated_points"
    """参与动画的采样点数 (int)"""

    # ==================== Render (绘制配置) ====================
    RENDER_DRAWING_MODE = "render.drawing_mode"
    RENDER_BAR_WIDTH = "render.bar_width"
    RENDER_BAR_SPACE = "render.bar_space"
    RENDER_BAR_MAX_POINTS = "render.bar_max_points"
    RENDER_BAR_CORNER_RADIUS = "render.bar_corner_radius"
    RENDER_CIRCLE_POINTS = "render.circle_points"
    RENDER_CIRCLE_FLOOR = "render.circle_floor"
    RENDER_CIRCLE_GAIN = "render.circle_gain"
    RENDER_WAVEFORM_DIVISOR = "render.waveform_divisor"
    RENDER_SPECTRUM_EXPONENT = "render.spectrum_exponent"
    RENDER_STROKE_WIDTH = "render.stroke_width"
    RENDER_COLORS = "render.colors"

    # ==================== Recorder (录制配置) ====================
    RECORDER_OUTPUT_DIR = "recorder.output_dir"
    """波形文件目录 (str): "auto" 表示配置目录下的 recordings"""

    # ==================== Progress (进度配置) ====================
    PROGRESS_INTERVAL_MS = "progress.interval_ms"

    # ==================== Logging (日志配置) ====================
    LOGGING_LEVEL = "logging.level"
    LOGGING_CONSOLE_OUTPUT = "logging.console_output"
    LOGGING_ENABLED_CATEGORIES = "logging.enabled_categories"
