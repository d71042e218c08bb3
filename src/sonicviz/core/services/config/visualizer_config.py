"""Immutable settings passed to components at construction

Capture size, animation timing and bar geometry live here instead of in
module-level constants. Each struct validates itself in ``__post_init__`` so
that a bad value fails where it is configured, not on the first frame.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ....utils import CaptureConfigurationError, logger
from .config_keys import ConfigKeys
from .config_reader import ConfigReader

DRAWING_MODES = ("waveform", "spectrum", "both")


def is_power_of_two(value: int) -> bool:
    return isinstance(value, int) and value > 0 and (value & (value - 1)) == 0


@dataclass(frozen=True)
class CaptureSettings:
    capture_size: int = 512
    frame_rate_hint_mhz: Optional[int] = None
    max_capture_rate_mhz: int = 20000

    def __post_init__(self):
        if not is_power_of_two(self.capture_size):
            raise CaptureConfigurationError(
                f"Capture size must be a power of two, got {self.capture_size}",
                context={"capture_size": self.capture_size},
            )
        if self.max_capture_rate_mhz <= 0:
            raise CaptureConfigurationError(
                f"Maximum capture rate must be positive, got {self.max_capture_rate_mhz}"
            )
        if self.frame_rate_hint_mhz is not None and self.frame_rate_hint_mhz <= 0:
            raise CaptureConfigurationError(
                f"Frame rate hint must be positive, got {self.frame_rate_hint_mhz}"
            )


@dataclass(frozen=True)
class AnimationSettings:
    duration_ms: int = 150
    frame_interval_ms: int = 16
    rotation_period_ms: int = 10000
    animated_points: int = 128

    def __post_init__(self):
        for name in ("duration_ms", "frame_interval_ms", "rotation_period_ms", "animated_points"):
            if getattr(self, name) <= 0:
                raise CaptureConfigurationError(
                    f"Animation setting '{name}' must be positive",
                    context={name: getattr(self, name)},
                )


@dataclass(frozen=True)
class RenderSettings:
    drawing_mode: str = "both"
    bar_width: float = 4.0
    bar_space: float = 1.0
    bar_max_points: int = 128
    bar_corner_radius: float = 3.0
    circle_points: int = 64
    circle_floor: float = 0.3
    circle_gain: float = 0.7
    waveform_divisor: float = 128.0
    spectrum_exponent: float = 1.5
    stroke_width: float = 3.0
    waveform_colors: Tuple[str, str] = ("#4CAF50", "#00BCD4")
    spectrum_colors: Tuple[str, str] = ("#FF5722", "#FFEB3B")
    background_colors: Tuple[str, ...] = ("#00574B", "#003840", "#002030")

    def __post_init__(self):
        if self.drawing_mode not in DRAWING_MODES:
            raise CaptureConfigurationError(
                f"Unknown drawing mode '{self.drawing_mode}'",
                context={"allowed": list(DRAWING_MODES)},
            )
        if self.bar_max_points <= 0 or self.circle_points <= 0:
            raise CaptureConfigurationError("Bar and circle point counts must be positive")
        if self.waveform_divisor == 0:
            raise CaptureConfigurationError("Waveform divisor must be non-zero")


@dataclass(frozen=True)
class RecorderSettings:
    output_dir: Path = field(default_factory=lambda: Path("recordings"))


@dataclass(frozen=True)
class ProgressSettings:
    interval_ms: int = 100

    def __post_init__(self):
        if self.interval_ms <= 0:
            raise CaptureConfigurationError("Progress interval must be positive")


@dataclass(frozen=True)
class VisualizerConfig:
    capture: CaptureSettings = field(default_factory=CaptureSettings)
    animation: AnimationSettings = field(default_factory=AnimationSettings)
    render: RenderSettings = field(default_factory=RenderSettings)
    recorder: RecorderSettings = field(default_factory=RecorderSettings)
    progress: ProgressSettings = field(default_factory=ProgressSettings)

    @classmethod
    def from_reader(cls, reader: ConfigReader) -> "VisualizerConfig":
        """从配置读取器构建（数值在各 Settings 中校验）"""
        get = reader.get_setting

        output_dir = get(ConfigKeys.RECORDER_OUTPUT_DIR, "auto")
        if output_dir in (None, "", "auto"):
            output_path = reader.config_path.parent / "recordings"
        else:
            output_path = Path(output_dir).expanduser()

        colors = get(ConfigKeys.RENDER_COLORS, {}) or {}
        defaults = RenderSettings

        return cls(
            capture=CaptureSettings(
                capture_size=int(get(ConfigKeys.CAPTURE_SIZE, 512)),
                frame_rate_hint_mhz=get(ConfigKeys.CAPTURE_FRAME_RATE_HINT_MHZ),
                max_capture_rate_mhz=int(get(ConfigKeys.CAPTURE_MAX_RATE_MHZ, 20000)),
            ),
            animation=AnimationSettings(
                duration_ms=int(get(ConfigKeys.ANIMATION_DURATION_MS, 150)),
                frame_interval_ms=int(get(ConfigKeys.ANIMATION_FRAME_INTERVAL_MS, 16)),
                rotation_period_ms=int(get(ConfigKeys.ANIMATION_ROTATION_PERIOD_MS, 10000)),
                animated_points=int(get(ConfigKeys.ANIMATION_POINTS, 128)),
            ),
            render=RenderSettings(
                drawing_mode=str(get(ConfigKeys.RENDER_DRAWING_MODE, "both")).lower(),
                bar_width=float(get(ConfigKeys.RENDER_BAR_WIDTH, 4.0)),
                bar_space=float(get(ConfigKeys.RENDER_BAR_SPACE, 1.0)),
                bar_max_points=int(get(ConfigKeys.RENDER_BAR_MAX_POINTS, 128)),
                bar_corner_radius=float(get(ConfigKeys.RENDER_BAR_CORNER_RADIUS, 3.0)),
                circle_points=int(get(ConfigKeys.RENDER_CIRCLE_POINTS, 64)),
                circle_floor=float(get(ConfigKeys.RENDER_CIRCLE_FLOOR, 0.3)),
                circle_gain=float(get(ConfigKeys.RENDER_CIRCLE_GAIN, 0.7)),
                waveform_divisor=float(get(ConfigKeys.RENDER_WAVEFORM_DIVISOR, 128.0)),
                spectrum_exponent=float(get(ConfigKeys.RENDER_SPECTRUM_EXPONENT, 1.5)),
                stroke_width=float(get(ConfigKeys.RENDER_STROKE_WIDTH, 3.0)),
                waveform_colors=(
                    colors.get("waveform_start", defaults.waveform_colors[0]),
                    colors.get("waveform_end", defaults.waveform_colors[1]),
                ),
                spectrum_colors=(
                    colors.get("spectrum_start", defaults.spectrum_colors[0]),
                    colors.get("spectrum_end", defaults.spectrum_colors[1]),
                ),
                background_colors=tuple(colors.get("background", defaults.background_colors)),
            ),
            recorder=RecorderSettings(output_dir=output_path),
            progress=ProgressSettings(
                interval_ms=int(get(ConfigKeys.PROGRESS_INTERVAL_MS, 100)),
            ),
        )


def load_visualizer_config(config_path: Optional[Path] = None) -> VisualizerConfig:
    """读取配置文件并构建 VisualizerConfig，同时应用日志设置"""
    reader = ConfigReader(config_path)
    reader.load_config()
    logger.set_config_service(reader)
    return VisualizerConfig.from_reader(reader)
