"""采集帧路由器

CaptureSource 只认识一个 IFrameConsumer，这里把每一帧分发给
可视化视图（平滑 + 绘制）和录制器（持久化）。
"""

from typing import Optional

import numpy as np

from ..core.interfaces.capture import IFrameConsumer
from ..utils import ErrorReporter, RecordingError, app_logger, get_error_reporter
from .recorder import WaveformRecorder


class FrameRouter(IFrameConsumer):
    """采集帧分发

    职责：
    - 波形：交给视图，录制中则追加到录制文件
    - 频谱：只交给视图
    - 录制写入失败：录制器已自行停止，这里上报错误，可视化不受影响
    """

    def __init__(
        self,
        view: Optional[IFrameConsumer] = None,
        recorder: Optional[WaveformRecorder] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self._view = view
        self._recorder = recorder
        self._error_reporter = error_reporter or get_error_reporter()

    def set_view(self, view: Optional[IFrameConsumer]) -> None:
        self._view = view

    def on_waveform(self, waveform: np.ndarray, sampling_rate: int) -> None:
        # 视图异常不能影响录制
        if self._view is not None:
            try:
                self._view.on_waveform(waveform, sampling_rate)
            except Exception as e:
                app_logger.log_error(e, "frame_router_view_waveform")

        recorder = self._recorder
        if recorder is not None and recorder.is_recording:
            try:
                recorder.append(waveform)
            except RecordingError as e:
                self._error_reporter.report_error(e, "frame_router")
                app_logger.log_recorder_event(
                    "Recording stopped after write failure",
                    {"bytes_written": recorder.bytes_written},
                )

    def on_spectrum(self, fft: np.ndarray, sampling_rate: int) -> None:
        if self._view is not None:
            try:
                self._view.on_spectrum(fft, sampling_rate)
            except Exception as e:
                app_logger.log_error(e, "frame_router_view_spectrum")
