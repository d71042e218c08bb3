"""基于 QTimer 的调度器

所有任务都挂在创建它们的线程的 Qt 事件循环上，因此采集、动画、
进度回调天然串行执行，无需加锁。
"""

import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer

from ..interfaces.scheduler import IRepeatingTask, IScheduler


class QtRepeatingTask(IRepeatingTask):
    """QTimer 封装的周期任务"""

    def __init__(
        self,
        interval_ms: float,
        callback: Callable[[], None],
        parent: Optional[QObject] = None,
    ):
        self._interval_ms = interval_ms
        self._callback = callback
        self._timer = QTimer(parent)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, int(round(interval_ms))))
        self._timer.timeout.connect(self._on_timeout)

    def _on_timeout(self) -> None:
        # stop() 之后队列里可能还残留一次 timeout
        if self._timer.isActive():
            self._callback()

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        if self._timer.isActive():
            self._timer.stop()


class QtScheduler(IScheduler):
    """在当前线程的 Qt 事件循环上创建周期任务"""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent

    def create_repeating_task(
        self, interval_ms: float, callback: Callable[[], None]
    ) -> QtRepeatingTask:
        return QtRepeatingTask(interval_ms, callback, self._parent)

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0
