"""可视化渲染器

每个显示帧调用一次 render()，按层输出绘制指令：

1. 径向渐变背景
2. 圆形波形（随全局角度旋转）
3. 镜像线性波形 或 频谱柱，由绘制模式决定

渲染只读取 AnimatedSignal 的当前快照，不做任何 I/O。
"""

from typing import List, Optional, Tuple

import numpy as np

from ..core.interfaces.display import Viewport
from ..core.services.config import RenderSettings
from .commands import DrawCommand, LinearGradient, RadialGradientFill, RoundedBars, StrokePath
from .signal import AnimatedSignal, DrawingMode

BACKGROUND_RADIUS_FACTOR = 0.8
WAVEFORM_HEIGHT_FRACTION = 1.0 / 3.0


class Renderer:
    """把 AnimatedSignal 转换成绘制指令"""

    def __init__(self, settings: Optional[RenderSettings] = None):
        self._settings = settings or RenderSettings()
        self._waveform_colors: Tuple[str, str] = tuple(self._settings.waveform_colors)
        self._spectrum_colors: Tuple[str, str] = tuple(self._settings.spectrum_colors)
        self._background_colors: Tuple[str, ...] = tuple(self._settings.background_colors)

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    @property
    def waveform_colors(self) -> Tuple[str, str]:
        return self._waveform_colors

    @property
    def spectrum_colors(self) -> Tuple[str, str]:
        return self._spectrum_colors

    def set_waveform_colors(self, start: str, end: str) -> None:
        self._waveform_colors = (start, end)

    def set_spectrum_colors(self, start: str, end: str) -> None:
        self._spectrum_colors = (start, end)

    def render(
        self, signal: AnimatedSignal, viewport: Viewport, mode: DrawingMode = DrawingMode.BOTH
    ) -> List[DrawCommand]:
        width, height = float(viewport.width), float(viewport.height)
        if width <= 0 or height <= 0:
            return []

        cx, cy = viewport.center
        commands: List[DrawCommand] = [self._background(width, height)]

        if mode == DrawingMode.WAVEFORM:
            commands.extend(self._circle_wave(signal, cx, cy, min(width, height) / 2))
            commands.extend(self._linear_wave(signal, width, height, cy))
        elif mode == DrawingMode.SPECTRUM:
            commands.extend(self._spectrum_bars(signal, width, height))
        else:
            commands.extend(self._circle_wave(signal, cx, cy, min(width, height) / 3))
            commands.extend(self._spectrum_bars(signal, width, height))

        return commands

    def _background(self, width: float, height: float) -> RadialGradientFill:
        return RadialGradientFill(
            rect=(0.0, 0.0, width, height),
            center=(width / 2, height / 2),
            radius=width * BACKGROUND_RADIUS_FACTOR,
            colors=self._background_colors,
        )

    def _circle_wave(
        self, signal: AnimatedSignal, cx: float, cy: float, radius: float
    ) -> List[DrawCommand]:
        s = self._settings
        count = min(s.circle_points, signal.waveform_size)
        if count == 0:
            return []

        values = signal.waveform_values()[:count]
        magnitude = s.circle_floor + (values / s.waveform_divisor) * s.circle_gain
        angles = np.radians(np.arange(count) * (360.0 / count))

        points = np.column_stack(
            (cx + np.cos(angles) * radius * magnitude, cy + np.sin(angles) * radius * magnitude)
        )

        gradient = LinearGradient(
            start=(cx - radius, cy), end=(cx + radius, cy), colors=self._waveform_colors
        )
        return [
            StrokePath(
                points=points,
                closed=True,
                gradient=gradient,
                stroke_width=s.stroke_width,
                rotation=signal.rotation_angle,
                pivot=(cx, cy),
            )
        ]

    def _linear_wave(
        self, signal: AnimatedSignal, width: float, height: float, cy: float
    ) -> List[DrawCommand]:
        s = self._settings
        count = signal.waveform_size
        if count == 0:
            return []

        xs = np.arange(count) * (width / count)
        offsets = (signal.waveform_values() / s.waveform_divisor) * (height * WAVEFORM_HEIGHT_FRACTION)

        gradient = LinearGradient(start=(0.0, 0.0), end=(width, 0.0), colors=self._waveform_colors)
        # 上下对称的两条折线
        return [
            StrokePath(
                points=np.column_stack((xs, cy + offsets)),
                closed=False,
                gradient=gradient,
                stroke_width=s.stroke_width,
            ),
            StrokePath(
                points=np.column_stack((xs, cy - offsets)),
                closed=False,
                gradient=gradient,
                stroke_width=s.stroke_width,
            ),
        ]

    def _spectrum_bars(
        self, signal: AnimatedSignal, width: float, height: float
    ) -> List[DrawCommand]:
        s = self._settings
        bar_count = min(signal.spectrum_size, s.bar_max_points)
        if bar_count == 0:
            return []

        bar_step = int(width) // bar_count
        bar_width = min(s.bar_width, bar_step - s.bar_space)
        if bar_width <= 0:
            # 视图太窄，放不下任何柱子
            return []

        magnitudes = np.clip(signal.spectrum_values()[:bar_count], 0.0, 1.0)
        bar_heights = np.power(magnitudes, s.spectrum_exponent) * height

        lefts = np.arange(bar_count) * bar_step + s.bar_space
        rects = np.column_stack(
            (lefts, height - bar_heights, lefts + bar_width, np.full(bar_count, height))
        )

        gradient = LinearGradient(start=(0.0, height), end=(0.0, 0.0), colors=self._spectrum_colors)
        return [RoundedBars(rects=rects, corner_radius=s.bar_corner_radius, gradient=gradient)]
