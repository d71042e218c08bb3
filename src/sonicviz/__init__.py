"""SonicViz - 实时音频可视化

播放中按固定周期采集波形和频谱，平滑成动画信号后绘制为
背景渐变、圆形波形、镜像波形和频谱柱，并可把原始波形录制到文件。
"""

__version__ = "0.1.0"
__description__ = "SonicViz"

from .core.controllers import PlaybackController
from .core.visualizer_lifecycle import VisualizerLifecycle
from .utils import app_logger

__all__ = ["PlaybackController", "VisualizerLifecycle", "app_logger"]
