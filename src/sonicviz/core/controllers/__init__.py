"""控制器模块

把外部播放器事件接到可视化生命周期上。
"""

from .playback_controller import PlaybackController

__all__ = ["PlaybackController"]
