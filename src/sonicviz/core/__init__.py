"""核心逻辑模块初始化

生命周期、进度跟踪和控制器依赖 audio / visual 包，请从各自的子模块导入：

    from sonicviz.core.visualizer_lifecycle import VisualizerLifecycle
    from sonicviz.core.controllers import PlaybackController
"""

# 配置服务
from .services import ConfigKeys, ConfigReader, VisualizerConfig, load_visualizer_config

# 接口定义
from .interfaces import (
    IDisplaySurface,
    IFrameConsumer,
    IMediaPlayer,
    IPermissionService,
    IScheduler,
    ITapProvider,
    PlaybackState,
    Song,
    Viewport,
    VisualizerState,
)

__all__ = [
    "ConfigKeys",
    "ConfigReader",
    "VisualizerConfig",
    "load_visualizer_config",
    "IDisplaySurface",
    "IFrameConsumer",
    "IMediaPlayer",
    "IPermissionService",
    "IScheduler",
    "ITapProvider",
    "PlaybackState",
    "Song",
    "Viewport",
    "VisualizerState",
]
