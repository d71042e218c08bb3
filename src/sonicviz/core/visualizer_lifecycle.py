"""可视化生命周期管理

负责连接播放器会话、采集源、录制器和可视化视图：

    UNINITIALIZED → ACTIVE ⇄ PAUSED → RELEASED

所有失败都通过 ErrorReporter 上报并降级为"无可视化"或"无录制"，
不会抛给调用方，也不会影响播放本身。
"""

from pathlib import Path
from typing import Optional

from ..audio.capture_source import CaptureSource
from ..audio.frame_router import FrameRouter
from ..audio.recorder import WaveformRecorder
from ..utils import (
    CaptureSessionError,
    ErrorReporter,
    RecordingError,
    VisualizerError,
    app_logger,
    get_error_reporter,
)
from ..visual.view import VisualizerView
from .interfaces.capture import ITapProvider
from .interfaces.player import INVALID_SESSION_ID, IMediaPlayer
from .interfaces.scheduler import IScheduler
from .interfaces.state import VisualizerState
from .services.config import VisualizerConfig


class VisualizerLifecycle:
    """可视化生命周期（一首歌一个实例）

    Args:
        player: 外部播放器，提供音频会话ID
        view: 可视化视图，接收平滑前的原始帧
        song_title: 当前曲目标题，用于录制文件名
        tap_provider: 平台采集点
        scheduler: 周期任务调度器
        config: 全局配置，None 使用默认值
        recorder: 自定义录制器（测试用），None 时按配置创建
        error_reporter: 错误上报通道，None 使用全局实例
    """

    def __init__(
        self,
        player: IMediaPlayer,
        view: VisualizerView,
        song_title: str,
        tap_provider: ITapProvider,
        scheduler: IScheduler,
        config: Optional[VisualizerConfig] = None,
        recorder: Optional[WaveformRecorder] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self._player = player
        self._view = view
        self._song_title = song_title
        self._config = config or VisualizerConfig()
        self._error_reporter = error_reporter or get_error_reporter()

        self._capture = CaptureSource(tap_provider, scheduler)
        self._recorder = recorder or WaveformRecorder(self._config.recorder.output_dir)
        self._router = FrameRouter(view, self._recorder, self._error_reporter)

        self._state = VisualizerState.UNINITIALIZED
        self._is_setup = False

    # ============ 状态迁移 ============

    def setup_and_start(self) -> bool:
        """打开采集并启用

        Returns:
            True 表示进入 ACTIVE；会话无效或采集参数错误时返回 False
        """
        session_id = self._player.session_id
        if session_id is None or session_id == INVALID_SESSION_ID or session_id < 0:
            self._report(
                CaptureSessionError("Invalid audio session id", session_id=session_id),
                "setup_and_start",
            )
            return False

        # 重入保护：先释放旧句柄
        self._capture.release()
        self._is_setup = False
        self._router.set_view(self._view)

        capture_settings = self._config.capture
        try:
            self._capture.attach(
                session_id,
                capture_settings.capture_size,
                capture_settings.frame_rate_hint_mhz,
                consumer=self._router,
                max_capture_rate_mhz=capture_settings.max_capture_rate_mhz,
            )
            self._capture.enable()
        except VisualizerError as e:
            self._recorder.stop()
            self._capture.release()
            if self._state != VisualizerState.RELEASED:
                self._state = VisualizerState.UNINITIALIZED
            self._report(e, "setup_and_start")
            return False

        self._is_setup = True
        self._transition(VisualizerState.ACTIVE, {"session_id": session_id})
        return True

    def pause(self) -> None:
        """ACTIVE → PAUSED；其他状态下什么都不做"""
        if self._state != VisualizerState.ACTIVE:
            return

        self._capture.disable()
        self._view.cancel_pending_animation()
        self._recorder.stop()
        self._transition(VisualizerState.PAUSED)

    def resume(self) -> bool:
        """PAUSED → ACTIVE 并开始新的录制；未初始化时等同于 setup_and_start()"""
        if not self._is_setup:
            return self.setup_and_start()

        if self._state == VisualizerState.PAUSED:
            self._capture.enable()
            self._transition(VisualizerState.ACTIVE)

        self.start_recording()
        return True

    def release(self) -> None:
        """任意状态 → RELEASED，可重复调用"""
        if self._state == VisualizerState.RELEASED:
            return

        self._recorder.stop()
        self._capture.release()
        self._view.cancel_pending_animation()
        self._router.set_view(None)
        self._is_setup = False
        self._transition(VisualizerState.RELEASED)

    # ============ 录制 ============

    def start_recording(self) -> Optional[Path]:
        """开始录制（仅在 ACTIVE 时有效）

        Returns:
            输出文件路径；未激活或打开失败时返回 None
        """
        if self._state != VisualizerState.ACTIVE:
            app_logger.log_recorder_event(
                "Recording not started", {"state": self._state.value}
            )
            return None

        if self._recorder.is_recording:
            return self._recorder.output_path

        try:
            return self._recorder.start(self._song_title)
        except RecordingError as e:
            self._report(e, "start_recording")
            return None

    def stop_recording(self) -> None:
        self._recorder.stop()

    # ============ 内部工具 ============

    def _transition(self, new_state: VisualizerState, details: Optional[dict] = None) -> None:
        old_state = self._state
        self._state = new_state
        payload = {"from": old_state.value, "to": new_state.value, "title": self._song_title}
        if details:
            payload.update(details)
        app_logger.log_lifecycle_event("State changed", payload)

    def _report(self, error: VisualizerError, operation: str) -> None:
        self._error_reporter.report_error(
            error,
            "visualizer_lifecycle",
            {"operation": operation, "state": self._state.value},
        )

    # ============ 属性 ============

    @property
    def state(self) -> VisualizerState:
        return self._state

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    @property
    def is_recording(self) -> bool:
        return self._recorder.is_recording

    @property
    def recording_path(self) -> Optional[Path]:
        return self._recorder.output_path

    @property
    def song_title(self) -> str:
        return self._song_title

    @property
    def capture_source(self) -> CaptureSource:
        return self._capture

    @property
    def recorder(self) -> WaveformRecorder:
        return self._recorder
