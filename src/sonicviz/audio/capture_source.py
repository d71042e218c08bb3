"""音频采集源

包装平台的会话采集点：attach 时校验参数并打开句柄，enable 后按固定
周期（平台最大采集率与期望值中较小者的一半）抓取一帧，分别投递波形
和频谱给 IFrameConsumer。
"""

from typing import Optional

from ..core.interfaces.capture import ICaptureTap, IFrameConsumer, ITapProvider
from ..core.interfaces.scheduler import IRepeatingTask, IScheduler
from ..core.services.config import is_power_of_two
from ..utils import CaptureConfigurationError, CaptureStateError, app_logger


def capture_interval_ms(max_rate_mhz: int, rate_hint_mhz: Optional[int] = None) -> float:
    """采集周期（毫秒）

    采集率以毫赫兹计；实际频率取 min(最大值, 期望值) / 2。
    """
    rate = max_rate_mhz if rate_hint_mhz is None else min(max_rate_mhz, rate_hint_mhz)
    effective_mhz = rate / 2.0
    return 1_000_000.0 / effective_mhz


class CaptureSource:
    """音频采集源

    持有唯一的平台采集句柄；release() 无论是否 enable 过都会释放它，
    可以重复调用。
    """

    def __init__(self, tap_provider: ITapProvider, scheduler: IScheduler):
        self._tap_provider = tap_provider
        self._scheduler = scheduler

        self._tap: Optional[ICaptureTap] = None
        self._task: Optional[IRepeatingTask] = None
        self._consumer: Optional[IFrameConsumer] = None
        self._capture_size = 0
        self._frames_delivered = 0

    def attach(
        self,
        session_id: int,
        capture_size: int,
        frame_rate_hint_mhz: Optional[int] = None,
        consumer: Optional[IFrameConsumer] = None,
        max_capture_rate_mhz: Optional[int] = None,
    ) -> bool:
        """打开采集句柄并注册周期回调（不启用）

        Args:
            max_capture_rate_mhz: 配置的采集率上限，与平台上限取较小者

        Returns:
            True 表示成功

        Raises:
            CaptureConfigurationError: capture_size 不是2的幂，或采集率无效
            CaptureSessionError: 会话ID无效
        """
        if not is_power_of_two(capture_size):
            raise CaptureConfigurationError(
                f"Capture size must be a power of two, got {capture_size}",
                context={"capture_size": capture_size},
            )
        if frame_rate_hint_mhz is not None and frame_rate_hint_mhz <= 0:
            raise CaptureConfigurationError(
                f"Frame rate hint must be positive, got {frame_rate_hint_mhz}"
            )
        if max_capture_rate_mhz is not None and max_capture_rate_mhz <= 0:
            raise CaptureConfigurationError(
                f"Maximum capture rate must be positive, got {max_capture_rate_mhz}"
            )

        # 重复 attach 时先释放旧句柄
        self.release()

        tap = self._tap_provider.open_tap(session_id)
        tap.enabled = False

        max_rate_mhz = self._tap_provider.max_capture_rate_mhz
        if max_capture_rate_mhz is not None:
            max_rate_mhz = min(max_rate_mhz, max_capture_rate_mhz)
        interval_ms = capture_interval_ms(max_rate_mhz, frame_rate_hint_mhz)

        self._tap = tap
        self._capture_size = capture_size
        self._consumer = consumer
        self._frames_delivered = 0
        self._task = self._scheduler.create_repeating_task(interval_ms, self._on_capture_tick)

        app_logger.log_capture_event(
            "Capture attached",
            {
                "session_id": session_id,
                "capture_size": capture_size,
                "interval_ms": round(interval_ms, 2),
                "sampling_rate": tap.sampling_rate,
            },
        )
        return True

    def set_consumer(self, consumer: Optional[IFrameConsumer]) -> None:
        self._consumer = consumer

    def enable(self) -> None:
        if self._tap is None or self._task is None:
            raise CaptureStateError("Capture source is not attached")

        self._tap.enabled = True
        self._task.start()
        app_logger.log_capture_event("Capture enabled", {"session_id": self._tap.session_id})

    def disable(self) -> None:
        """停止周期回调，保留句柄"""
        if self._task is not None:
            self._task.cancel()
        if self._tap is not None and self._tap.enabled:
            self._tap.enabled = False
            app_logger.log_capture_event(
                "Capture disabled",
                {"session_id": self._tap.session_id, "frames_delivered": self._frames_delivered},
            )

    def release(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

        if self._tap is not None:
            tap = self._tap
            self._tap = None
            tap.release()
            app_logger.log_capture_event(
                "Capture released",
                {"session_id": tap.session_id, "frames_delivered": self._frames_delivered},
            )

        self._consumer = None

    def _on_capture_tick(self) -> None:
        tap = self._tap
        if tap is None or not tap.enabled:
            return

        try:
            frame = tap.capture(self._capture_size)
        except Exception as e:
            app_logger.log_error(e, "capture_tick")
            return

        self._frames_delivered += 1
        consumer = self._consumer
        if consumer is None:
            return

        # 两路投递相互独立，任一回调出错不影响另一路
        try:
            consumer.on_waveform(frame.waveform, frame.sampling_rate)
        except Exception as e:
            app_logger.log_error(e, "capture_waveform_callback")

        try:
            consumer.on_spectrum(frame.fft, frame.sampling_rate)
        except Exception as e:
            app_logger.log_error(e, "capture_spectrum_callback")

    @property
    def is_attached(self) -> bool:
        return self._tap is not None

    @property
    def is_enabled(self) -> bool:
        return self._tap is not None and self._tap.enabled

    @property
    def capture_size(self) -> int:
        return self._capture_size

    @property
    def frames_delivered(self) -> int:
        return self._frames_delivered
