"""播放控制器

把播放器的事件转换为可视化生命周期操作：

- 曲目准备完毕：重建 VisualizerLifecycle（需要采集权限）
- 播放 / 暂停：resume + 录制 / pause + 停止录制
- 权限授予：若仍在播放，从 UNINITIALIZED 重新建立可视化
"""

from typing import Optional

from ...utils import ErrorReporter, PermissionDeniedError, app_logger, get_error_reporter
from ...visual.view import VisualizerView
from ..interfaces.capture import ITapProvider
from ..interfaces.permission import GrantedPermissionService, IPermissionService
from ..interfaces.player import IMediaPlayer, PlaybackState, Song
from ..interfaces.scheduler import IScheduler
from ..progress_tracker import ProgressTracker
from ..services.config import VisualizerConfig
from ..visualizer_lifecycle import VisualizerLifecycle


class PlaybackController:
    """播放事件 → 可视化生命周期"""

    def __init__(
        self,
        player: IMediaPlayer,
        view: VisualizerView,
        tap_provider: ITapProvider,
        scheduler: IScheduler,
        permission_service: Optional[IPermissionService] = None,
        config: Optional[VisualizerConfig] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self._player = player
        self._view = view
        self._tap_provider = tap_provider
        self._scheduler = scheduler
        self._permissions = permission_service or GrantedPermissionService()
        self._config = config or VisualizerConfig()
        self._error_reporter = error_reporter or get_error_reporter()

        self._lifecycle: Optional[VisualizerLifecycle] = None
        self._progress = ProgressTracker(
            player, scheduler, interval_ms=self._config.progress.interval_ms
        )
        self._shut_down = False

        player.add_prepared_listener(self.on_song_prepared)
        player.add_state_listener(self.on_playback_state_changed)

    # ============ 播放器事件 ============

    def on_song_prepared(self, song: Song) -> None:
        if self._shut_down:
            return

        app_logger.log_playback_event(
            "Song prepared", {"title": song.title, "duration_ms": self._player.duration_ms}
        )
        self._release_lifecycle()

        if self._permissions.has_capture_permission():
            self._build_lifecycle(song)
        else:
            app_logger.log_playback_event("Capture permission missing, requesting", level="WARNING")
            self._permissions.request_capture_permission(self.on_permission_result)

        self._progress.start()

    def on_playback_state_changed(self, state: PlaybackState) -> None:
        if self._shut_down:
            return

        app_logger.log_playback_event("State changed", {"state": state.value})
        lifecycle = self._lifecycle

        if state == PlaybackState.PLAYING:
            if lifecycle is not None:
                lifecycle.resume()
                lifecycle.start_recording()
            self._progress.start()
        else:
            if lifecycle is not None:
                lifecycle.pause()
                lifecycle.stop_recording()
            # 同步取消进度轮询；_poll 中的自停只作兜底
            self._progress.stop()

    def on_permission_result(self, granted: bool) -> None:
        if self._shut_down:
            return

        if not granted:
            self._error_reporter.report_error(
                PermissionDeniedError("Audio capture permission denied"),
                "playback_controller",
            )
            return

        app_logger.log_playback_event("Capture permission granted")
        song = self._player.current_song
        if self._player.is_playing and song is not None:
            self._release_lifecycle()
            self._build_lifecycle(song)

    # ============ 内部工具 ============

    def _build_lifecycle(self, song: Song) -> None:
        lifecycle = VisualizerLifecycle(
            player=self._player,
            view=self._view,
            song_title=song.title,
            tap_provider=self._tap_provider,
            scheduler=self._scheduler,
            config=self._config,
            error_reporter=self._error_reporter,
        )
        self._lifecycle = lifecycle
        if lifecycle.setup_and_start():
            lifecycle.start_recording()

    def _release_lifecycle(self) -> None:
        if self._lifecycle is not None:
            self._lifecycle.release()
            self._lifecycle = None

    def shutdown(self) -> None:
        """释放可视化、进度轮询和视图"""
        if self._shut_down:
            return
        self._shut_down = True
        self._release_lifecycle()
        self._progress.stop()
        self._view.release()
        app_logger.log_playback_event("Playback controller shut down")

    # ============ 属性 ============

    @property
    def lifecycle(self) -> Optional[VisualizerLifecycle]:
        return self._lifecycle

    @property
    def progress(self) -> ProgressTracker:
        return self._progress

    @property
    def view(self) -> VisualizerView:
        return self._view
