"""Mock 对象库"""
from .player_mock import MockMediaPlayer
from .scheduler_mock import ManualScheduler, ManualTask
from .surface_mock import MockPermissionService, RecordingSurface

__all__ = [
    'MockMediaPlayer',
    'ManualScheduler',
    'ManualTask',
    'MockPermissionService',
    'RecordingSurface',
]
