"""Mock 显示表面和权限服务"""
from sonicviz.core.interfaces.display import Viewport
from sonicviz.core.interfaces.permission import IPermissionService


class RecordingSurface:
    """记录重绘请求的显示表面"""

    def __init__(self, width=400.0, height=300.0):
        self._viewport = Viewport(width, height)
        self.redraw_count = 0

    def request_redraw(self):
        self.redraw_count += 1

    def viewport(self):
        return self._viewport


class MockPermissionService(IPermissionService):
    """权限请求挂起，直到测试调用 respond()"""

    def __init__(self, granted=False):
        self.granted = granted
        self.pending = []
        self.request_count = 0

    def has_capture_permission(self):
        return self.granted

    def request_capture_permission(self, on_result):
        self.request_count += 1
        self.pending.append(on_result)

    def respond(self, granted):
        self.granted = granted
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback(granted)
