"""用户界面模块初始化"""

from .visualizer_widget import VisualizerWidget

__all__ = ["VisualizerWidget"]
