"""核心接口定义模块

组件之间只依赖这里的接口：采集句柄、帧消费者、播放器、调度器、显示表面。
"""

from .capture import ICaptureTap, IFrameConsumer, ITapProvider
from .display import IDisplaySurface, Viewport
from .permission import GrantedPermissionService, IPermissionService
from .player import (
    INVALID_SESSION_ID,
    IMediaPlayer,
    PlaybackState,
    PlaybackStateListener,
    PreparedListener,
    Song,
)
from .scheduler import IRepeatingTask, IScheduler
from .state import VisualizerState

__all__ = [
    "ICaptureTap",
    "IFrameConsumer",
    "ITapProvider",
    "IDisplaySurface",
    "Viewport",
    "GrantedPermissionService",
    "IPermissionService",
    "INVALID_SESSION_ID",
    "IMediaPlayer",
    "PlaybackState",
    "PlaybackStateListener",
    "PreparedListener",
    "Song",
    "IRepeatingTask",
    "IScheduler",
    "VisualizerState",
]
