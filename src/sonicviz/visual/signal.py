"""动画信号数据结构"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

import numpy as np

DEFAULT_ANIMATED_POINTS = 128


class DrawingMode(Enum):
    """绘制模式"""

    WAVEFORM = "waveform"  # 圆形波形 + 镜像线性波形
    SPECTRUM = "spectrum"  # 只显示频谱柱
    BOTH = "both"  # 圆形波形 + 频谱柱

    @classmethod
    def parse(cls, value: Union[str, "DrawingMode"]) -> "DrawingMode":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "fft":
            return cls.SPECTRUM
        return cls(name)


def _zeros(count: int) -> np.ndarray:
    return np.zeros(count, dtype=np.float64)


@dataclass
class AnimatedSignal:
    """平滑后的可视化信号

    waveform 保存未归一化的采样值（绘制时再除以 128），spectrum 在 [0, 1]。
    构造时全部为 0，有效长度等于容量，因此没有数据时也会画出最小半径的圆。
    """

    capacity: int = DEFAULT_ANIMATED_POINTS
    waveform: np.ndarray = None
    spectrum: np.ndarray = None
    rotation_angle: float = 0.0
    waveform_size: int = field(default=-1)
    spectrum_size: int = field(default=-1)

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError(f"capacity must be positive, got {self.capacity}")
        if self.waveform is None:
            self.waveform = _zeros(self.capacity)
        if self.spectrum is None:
            self.spectrum = _zeros(self.capacity)
        if self.waveform_size < 0:
            self.waveform_size = self.capacity
        if self.spectrum_size < 0:
            self.spectrum_size = self.capacity

    def waveform_values(self) -> np.ndarray:
        return self.waveform[: self.waveform_size]

    def spectrum_values(self) -> np.ndarray:
        return self.spectrum[: self.spectrum_size]

    @property
    def has_data(self) -> bool:
        """两路缓冲都非空"""
        return self.waveform_size > 0 and self.spectrum_size > 0
