"""权限服务接口定义"""

from abc import ABC, abstractmethod
from typing import Callable


class IPermissionService(ABC):
    """音频采集/存储权限"""

    @abstractmethod
    def has_capture_permission(self) -> bool:
        pass

    @abstractmethod
    def request_capture_permission(self, on_result: Callable[[bool], None]) -> None:
        """异步请求权限，结果通过 on_result(granted) 返回"""
        pass


class GrantedPermissionService(IPermissionService):
    """桌面平台没有运行时权限，始终视为已授权"""

    def has_capture_permission(self) -> bool:
        return True

    def request_capture_permission(self, on_result: Callable[[bool], None]) -> None:
        on_result(True)
