"""可视化模块：平滑、动画、渲染"""

from .animation import RotationAnimation, SmoothingAnimation
from .commands import DrawCommand, LinearGradient, RadialGradientFill, RoundedBars, StrokePath
from .renderer import Renderer
from .signal import AnimatedSignal, DrawingMode
from .smoother import Smoother, ease_out, spectrum_targets
from .view import VisualizerView

__all__ = [
    "RotationAnimation",
    "SmoothingAnimation",
    "DrawCommand",
    "LinearGradient",
    "RadialGradientFill",
    "RoundedBars",
    "StrokePath",
    "Renderer",
    "AnimatedSignal",
    "DrawingMode",
    "Smoother",
    "ease_out",
    "spectrum_targets",
    "VisualizerView",
]
