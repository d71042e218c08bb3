"""动画驱动

SmoothingAnimation: 固定时长的一次性插值，重新启动时从头计时
RotationAnimation:  无限循环的整圈旋转
两者都只依赖 IScheduler，测试时可用手动时钟驱动。
"""

from typing import Callable, Optional

from ..core.interfaces.scheduler import IRepeatingTask, IScheduler
from ..utils import app_logger
from .smoother import ease_out

Interpolator = Callable[[float], float]


class SmoothingAnimation:
    """固定时长的 0 → 1 插值动画

    每一帧把缓动后的进度交给 on_frame；到达终点后自动停止。
    """

    def __init__(
        self,
        scheduler: IScheduler,
        on_frame: Callable[[float], None],
        duration_ms: float = 150,
        frame_interval_ms: float = 16,
        interpolator: Interpolator = ease_out,
    ):
        self._scheduler = scheduler
        self._on_frame = on_frame
        self._duration_ms = float(duration_ms)
        self._frame_interval_ms = frame_interval_ms
        self._interpolator = interpolator

        self._task: Optional[IRepeatingTask] = None
        self._started_at_ms = 0.0
        self._restarts = 0

    def restart(self) -> None:
        """取消进行中的插值并从 0 开始"""
        if self._task is None:
            self._task = self._scheduler.create_repeating_task(
                self._frame_interval_ms, self._on_tick
            )
        else:
            self._task.cancel()

        self._started_at_ms = self._scheduler.now_ms()
        self._restarts += 1
        self._task.start()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()

    def _on_tick(self) -> None:
        elapsed = self._scheduler.now_ms() - self._started_at_ms
        progress = min(1.0, elapsed / self._duration_ms)

        if progress >= 1.0:
            self.cancel()

        self._on_frame(self._interpolator(progress))

    @property
    def is_running(self) -> bool:
        return self._task is not None and self._task.is_active

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def restarts(self) -> int:
        return self._restarts


class RotationAnimation:
    """0° → 360° 循环旋转，每个周期内使用同一条缓动曲线"""

    def __init__(
        self,
        scheduler: IScheduler,
        on_angle: Callable[[float], None],
        period_ms: float = 10000,
        frame_interval_ms: float = 16,
        interpolator: Interpolator = ease_out,
    ):
        self._scheduler = scheduler
        self._on_angle = on_angle
        self._period_ms = float(period_ms)
        self._interpolator = interpolator
        self._task = scheduler.create_repeating_task(frame_interval_ms, self._on_tick)
        self._started_at_ms = 0.0
        self._angle = 0.0

    def start(self) -> None:
        self._task.cancel()
        self._started_at_ms = self._scheduler.now_ms()
        self._angle = 0.0
        self._task.start()
        app_logger.log_animation_event("Rotation started", {"period_ms": self._period_ms})

    def cancel(self) -> None:
        if self._task.is_active:
            self._task.cancel()
            app_logger.log_animation_event("Rotation cancelled", {"angle": round(self._angle, 1)})

    def _on_tick(self) -> None:
        elapsed = (self._scheduler.now_ms() - self._started_at_ms) % self._period_ms
        self._angle = (360.0 * self._interpolator(elapsed / self._period_ms)) % 360.0
        self._on_angle(self._angle)

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def is_running(self) -> bool:
        return self._task.is_active
