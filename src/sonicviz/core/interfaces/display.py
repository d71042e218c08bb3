"""显示表面接口定义"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    @property
    def center(self):
        return self.width / 2, self.height / 2


class IDisplaySurface(Protocol):
    """接收绘制指令的显示表面

    用 Protocol 而不是 ABC：Qt 控件的元类不能与 ABCMeta 混用。
    """

    def request_redraw(self) -> None:
        ...

    def viewport(self) -> Viewport:
        ...
