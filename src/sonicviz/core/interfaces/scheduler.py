"""定时任务接口定义

所有周期回调（采集、动画、进度）都跑在同一条逻辑线程上，
由 IScheduler 创建；取消必须是同步且幂等的。
"""

from abc import ABC, abstractmethod
from typing import Callable


class IRepeatingTask(ABC):
    """可启动/取消的周期任务"""

    @property
    @abstractmethod
    def interval_ms(self) -> float:
        pass

    @property
    @abstractmethod
    def is_active(self) -> bool:
        pass

    @abstractmethod
    def start(self) -> None:
        """启动任务；已在运行时重新计时"""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """停止任务，返回后回调不会再触发；可重复调用"""
        pass


class IScheduler(ABC):
    """周期任务工厂 + 单调时钟"""

    @abstractmethod
    def create_repeating_task(
        self, interval_ms: float, callback: Callable[[], None]
    ) -> IRepeatingTask:
        pass

    @abstractmethod
    def now_ms(self) -> float:
        """单调时钟（毫秒）"""
        pass
