"""播放进度跟踪

播放中每 100ms 读取一次播放位置并发布 (position_ms, duration_ms)；
发现播放器已不在播放时自行停止，恢复播放后需要重新 start()。
"""

from typing import Callable, List, Optional

from ..utils import app_logger
from .base.lifecycle_component import LifecycleComponent
from .interfaces.player import IMediaPlayer
from .interfaces.scheduler import IRepeatingTask, IScheduler

ProgressListener = Callable[[int, int], None]

# 每秒记录一次进度：位置落在整秒后的一个采样周期内
_LOG_WINDOW_MS = 100


def format_time(time_ms: int) -> str:
    """毫秒 → mm:ss"""
    total_seconds = max(0, int(time_ms)) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


class ProgressTracker(LifecycleComponent):
    """播放进度轮询器"""

    def __init__(
        self,
        player: IMediaPlayer,
        scheduler: IScheduler,
        interval_ms: int = 100,
    ):
        super().__init__("ProgressTracker")
        self._player = player
        self._interval_ms = interval_ms
        self._task: IRepeatingTask = scheduler.create_repeating_task(interval_ms, self._poll)
        self._listeners: List[ProgressListener] = []

        self._position_ms = 0
        self._duration_ms = 0

    def add_listener(self, listener: ProgressListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ProgressListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _do_start(self) -> bool:
        self._task.start()
        # 立即采样一次，不等第一个周期
        self._poll()
        return True

    def _do_stop(self) -> bool:
        self._task.cancel()
        return True

    def _poll(self) -> None:
        if not self._player.is_playing:
            self._task.cancel()
            self._mark_stopped("playback not active")
            return

        position = self._player.position_ms
        duration = self._player.duration_ms
        self._position_ms = position
        self._duration_ms = duration

        for listener in list(self._listeners):
            try:
                listener(position, duration)
            except Exception as e:
                app_logger.log_error(e, "progress_listener")

        if position % 1000 < _LOG_WINDOW_MS:
            song = self._player.current_song
            title = song.title if song is not None else "unknown"
            app_logger.log_playback_event(
                f"{title} - {format_time(position)} / {format_time(duration)}",
                {"position_ms": position, "duration_ms": duration},
                level="DEBUG",
            )

    @property
    def position_ms(self) -> int:
        return self._position_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_polling(self) -> bool:
        return self._task.is_active
