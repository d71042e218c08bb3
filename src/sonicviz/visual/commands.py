"""绘制指令

Renderer 只产出这些与平台无关的指令，由显示表面（例如 Qt 控件）
负责真正的绘制。坐标单位为像素，原点在左上角。
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

Point = Tuple[float, float]


@dataclass(frozen=True)
class LinearGradient:
    start: Point
    end: Point
    colors: Tuple[str, ...]


@dataclass(frozen=True)
class RadialGradientFill:
    """用径向渐变填充矩形 (x, y, width, height)"""

    rect: Tuple[float, float, float, float]
    center: Point
    radius: float
    colors: Tuple[str, ...]


@dataclass(frozen=True)
class StrokePath:
    """折线描边

    points 形状为 (N, 2)；rotation 为绕 pivot 的顺时针角度（度）。
    """

    points: np.ndarray
    closed: bool
    gradient: LinearGradient
    stroke_width: float
    rotation: float = 0.0
    pivot: Point = (0.0, 0.0)


@dataclass(frozen=True)
class RoundedBars:
    """一组圆角矩形，rects 形状为 (N, 4)：left, top, right, bottom"""

    rects: np.ndarray
    corner_radius: float
    gradient: LinearGradient

    def __len__(self) -> int:
        return len(self.rects)


DrawCommand = Union[RadialGradientFill, StrokePath, RoundedBars]
