"""可视化视图

把采集帧交给 Smoother，用 SmoothingAnimation / RotationAnimation 推进
AnimatedSignal，并在需要时请求显示表面重绘。显示表面在 paint 时回调
render() 取绘制指令。
"""

from typing import List, Optional, Union

import numpy as np

from ..core.interfaces.capture import IFrameConsumer
from ..core.interfaces.display import IDisplaySurface, Viewport
from ..core.interfaces.scheduler import IScheduler
from ..core.services.config import AnimationSettings, RenderSettings
from ..utils import LogCategory, app_logger
from .animation import RotationAnimation, SmoothingAnimation
from .commands import DrawCommand
from .renderer import Renderer
from .signal import AnimatedSignal, DrawingMode
from .smoother import Smoother


class VisualizerView(IFrameConsumer):
    """平滑 + 渲染"""

    def __init__(
        self,
        scheduler: IScheduler,
        surface: Optional[IDisplaySurface] = None,
        animation_settings: Optional[AnimationSettings] = None,
        render_settings: Optional[RenderSettings] = None,
    ):
        animation_settings = animation_settings or AnimationSettings()
        render_settings = render_settings or RenderSettings()

        self._surface = surface
        self._smoother = Smoother(animation_settings.animated_points)
        self._renderer = Renderer(render_settings)
        self._mode = DrawingMode.parse(render_settings.drawing_mode)
        self._released = False

        self._smoothing = SmoothingAnimation(
            scheduler,
            self._on_smoothing_frame,
            duration_ms=animation_settings.duration_ms,
            frame_interval_ms=animation_settings.frame_interval_ms,
        )
        self._rotation = RotationAnimation(
            scheduler,
            self._on_rotation_frame,
            period_ms=animation_settings.rotation_period_ms,
            frame_interval_ms=animation_settings.frame_interval_ms,
        )
        self._rotation.start()

    # ============ 显示表面 ============

    def attach_surface(self, surface: Optional[IDisplaySurface]) -> None:
        self._surface = surface
        self._request_redraw()

    def _request_redraw(self) -> None:
        if self._surface is not None and not self._released:
            self._surface.request_redraw()

    # ============ IFrameConsumer ============

    def on_waveform(self, waveform: np.ndarray, sampling_rate: int) -> None:
        if self._released:
            return
        self._smoother.retarget_waveform(waveform)
        self._smoothing.restart()

    def on_spectrum(self, fft: np.ndarray, sampling_rate: int) -> None:
        if self._released:
            return
        self._smoother.retarget_spectrum(fft)
        self._smoothing.restart()

    # ============ 动画回调 ============

    def _on_smoothing_frame(self, fraction: float) -> None:
        self._smoother.tick(fraction)
        self._request_redraw()

    def _on_rotation_frame(self, angle: float) -> None:
        self._smoother.set_rotation(angle)
        # 只有两路缓冲都有数据时才需要重绘
        if self._smoother.signal.has_data:
            self._request_redraw()

    # ============ 渲染 ============

    def render(self, viewport: Optional[Viewport] = None) -> List[DrawCommand]:
        if viewport is None:
            if self._surface is None:
                return []
            viewport = self._surface.viewport()
        return self._renderer.render(self._smoother.signal, viewport, self._mode)

    def set_drawing_mode(self, mode: Union[str, DrawingMode]) -> None:
        self._mode = DrawingMode.parse(mode)
        app_logger.debug(
            "Drawing mode changed", LogCategory.RENDER, {"mode": self._mode.value}, "render"
        )
        self._request_redraw()

    def set_waveform_colors(self, start: str, end: str) -> None:
        self._renderer.set_waveform_colors(start, end)
        self._request_redraw()

    def set_spectrum_colors(self, start: str, end: str) -> None:
        self._renderer.set_spectrum_colors(start, end)
        self._request_redraw()

    # ============ 资源管理 ============

    def cancel_pending_animation(self) -> None:
        """取消进行中的平滑插值（旋转保持）"""
        self._smoothing.cancel()

    def release(self) -> None:
        if self._released:
            return
        self._smoothing.cancel()
        self._rotation.cancel()
        self._released = True
        app_logger.log_animation_event("Visualizer view released")

    @property
    def signal(self) -> AnimatedSignal:
        return self._smoother.signal

    @property
    def drawing_mode(self) -> DrawingMode:
        return self._mode

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def is_animating(self) -> bool:
        return self._smoothing.is_running

    @property
    def is_rotating(self) -> bool:
        return self._rotation.is_running

    @property
    def is_released(self) -> bool:
        return self._released
