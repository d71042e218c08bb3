"""信号平滑器

波形和频谱的插值方式不同：

- 波形：每一帧都从当前动画值向目标值逼近（目标在动，起点也在动）
- 频谱：新数据到达时把当前动画值快照为起点，之后在起点和目标之间插值

两者使用同一条 ease-out 曲线，由 SmoothingAnimation 驱动。
"""

import numpy as np

from .signal import DEFAULT_ANIMATED_POINTS, AnimatedSignal

SPECTRUM_SCALE = 255.0


def ease_out(t: float) -> float:
    """减速曲线 1 - (1 - t)^2，t 截断到 [0, 1]"""
    t = min(1.0, max(0.0, float(t)))
    return 1.0 - (1.0 - t) * (1.0 - t)


def spectrum_targets(fft: np.ndarray) -> np.ndarray:
    """abs(int8) / 255，结果落在 [0, 128/255]"""
    # 先转 int16，避免 abs(-128) 在 int8 上溢出
    return np.abs(np.asarray(fft).astype(np.int16)) / SPECTRUM_SCALE


class Smoother:
    """把原始采集帧转换成连续变化的 AnimatedSignal"""

    def __init__(self, points: int = DEFAULT_ANIMATED_POINTS):
        self._signal = AnimatedSignal(capacity=points)
        self._waveform_target = np.zeros(points, dtype=np.float64)
        self._spectrum_target = np.zeros(points, dtype=np.float64)
        self._spectrum_baseline = np.zeros(points, dtype=np.float64)

    @property
    def signal(self) -> AnimatedSignal:
        return self._signal

    @property
    def points(self) -> int:
        return self._signal.capacity

    def _snapshot_baseline(self) -> None:
        np.copyto(self._spectrum_baseline, self._signal.spectrum)

    def retarget_waveform(self, waveform: np.ndarray) -> None:
        count = min(len(waveform), self.points)
        self._waveform_target[:count] = np.asarray(waveform[:count], dtype=np.float64)
        self._signal.waveform_size = count
        self._snapshot_baseline()

    def retarget_spectrum(self, fft: np.ndarray) -> None:
        count = min(len(fft), self.points)
        self._spectrum_target[:count] = spectrum_targets(fft[:count])
        self._signal.spectrum_size = count
        self._snapshot_baseline()

    def retarget(self, frame) -> None:
        """用一个 CaptureFrame 同时更新两路目标"""
        self.retarget_waveform(frame.waveform)
        self.retarget_spectrum(frame.fft)

    def tick(self, fraction: float) -> AnimatedSignal:
        """推进一步插值

        Args:
            fraction: 经过缓动曲线后的进度，[0, 1]
        """
        fraction = min(1.0, max(0.0, float(fraction)))

        n = self._signal.waveform_size
        m = self._signal.spectrum_size

        if fraction == 1.0:
            # 终点直接取目标值，避免浮点误差
            self._signal.waveform[:n] = self._waveform_target[:n]
            self._signal.spectrum[:m] = self._spectrum_target[:m]
            return self._signal

        waveform = self._signal.waveform
        waveform[:n] += (self._waveform_target[:n] - waveform[:n]) * fraction

        baseline = self._spectrum_baseline[:m]
        self._signal.spectrum[:m] = baseline + (self._spectrum_target[:m] - baseline) * fraction

        return self._signal

    def set_rotation(self, angle: float) -> None:
        self._signal.rotation_angle = float(angle) % 360.0
