"""播放器接口定义（外部协作者，只读引用）"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable

INVALID_SESSION_ID = -1


class PlaybackState(Enum):
    """播放状态枚举"""

    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Song:
    """曲目信息（归曲库所有）"""

    id: int
    title: str
    artist: str = ""
    duration_hint_ms: int = 0
    resource_ref: str = ""


PlaybackStateListener = Callable[[PlaybackState], None]
PreparedListener = Callable[[Song], None]


class IMediaPlayer(ABC):
    """媒体播放器接口

    解码与播放由外部引擎完成，这里只关心会话ID、播放控制和状态通知。
    """

    @property
    @abstractmethod
    def session_id(self) -> int:
        """当前音频会话ID，无效时为 INVALID_SESSION_ID"""
        pass

    @property
    @abstractmethod
    def is_playing(self) -> bool:
        pass

    @property
    @abstractmethod
    def position_ms(self) -> int:
        pass

    @property
    @abstractmethod
    def duration_ms(self) -> int:
        pass

    @property
    @abstractmethod
    def current_song(self):
        """当前曲目 (Optional[Song])"""
        pass

    @abstractmethod
    def play(self) -> None:
        pass

    @abstractmethod
    def pause(self) -> None:
        pass

    @abstractmethod
    def seek_to(self, position_ms: int) -> None:
        pass

    @abstractmethod
    def add_state_listener(self, listener: PlaybackStateListener) -> None:
        """播放状态变化通知（playing / paused / stopped）"""
        pass

    @abstractmethod
    def add_prepared_listener(self, listener: PreparedListener) -> None:
        """曲目准备完毕、开始播放时的通知"""
        pass
