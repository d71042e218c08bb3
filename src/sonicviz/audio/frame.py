"""采集帧数据结构"""

from dataclasses import dataclass

import numpy as np


def _frozen_int8(data) -> np.ndarray:
    array = np.array(data, dtype=np.int8, copy=True).reshape(-1)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class CaptureFrame:
    """一次采集投递的波形 + 频谱

    两个数组都是只读的 int8 副本，投递之后不会被修改。
    """

    waveform: np.ndarray
    fft: np.ndarray
    sampling_rate: int

    def __post_init__(self):
        object.__setattr__(self, "waveform", _frozen_int8(self.waveform))
        object.__setattr__(self, "fft", _frozen_int8(self.fft))

    @property
    def size(self) -> int:
        return len(self.waveform)
