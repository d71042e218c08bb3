"""音频会话采集点

播放引擎把解码后的 PCM 按会话ID发布到 AudioSessionRegistry，
SessionTap 从中截取最近的采样，量化成 8 位波形和打包后的 FFT，
格式与常见平台可视化接口一致：

    waveform: int8 时域采样
    fft:      [Re0, Re(n/2), Re1, Im1, Re2, Im2, ...]，按 n/2 归一化后量化为 int8
"""

import threading
from typing import Dict, Optional

import numpy as np

from ..core.interfaces.capture import ICaptureTap, ITapProvider
from ..utils import CaptureSessionError, CaptureStateError, app_logger
from .frame import CaptureFrame

DEFAULT_MAX_CAPTURE_RATE_MHZ = 20000


def quantize_waveform(samples: np.ndarray) -> np.ndarray:
    """[-1, 1] 浮点采样 → int8"""
    scaled = np.round(np.asarray(samples, dtype=np.float64) * 127.0)
    return np.clip(scaled, -128, 127).astype(np.int8)


def pack_fft(samples: np.ndarray) -> np.ndarray:
    """实数 FFT 打包为与采样数等长的 int8 数组"""
    samples = np.asarray(samples, dtype=np.float64)
    n = len(samples)
    if n == 0:
        return np.zeros(0, dtype=np.int8)

    spectrum = np.fft.rfft(samples) / max(n / 2.0, 1.0)
    if n < 2:
        packed = spectrum.real[:n]
    else:
        half = n // 2
        packed = np.empty(n, dtype=np.float64)
        packed[0] = spectrum[0].real
        packed[1] = spectrum[half].real
        packed[2::2] = spectrum[1:half].real
        packed[3::2] = spectrum[1:half].imag

    return np.clip(np.round(packed * 127.0), -128, 127).astype(np.int8)


class _SessionBuffer:
    """单个会话的环形缓冲"""

    def __init__(self, capacity: int, sampling_rate: int):
        self.capacity = capacity
        self.sampling_rate = sampling_rate
        self.samples = np.zeros(0, dtype=np.float32)

    def append(self, pcm: np.ndarray) -> None:
        self.samples = np.concatenate([self.samples, pcm])[-self.capacity:]

    def latest(self, count: int) -> np.ndarray:
        available = self.samples[-count:] if count else self.samples[:0]
        if len(available) < count:
            padding = np.zeros(count - len(available), dtype=np.float32)
            available = np.concatenate([padding, available])
        return available.copy()


class AudioSessionRegistry(ITapProvider):
    """音频会话注册表

    播放线程调用 publish()，采集回调调用 latest_samples()，两者用锁隔开；
    除此之外所有调用都在 UI 线程上。
    """

    def __init__(
        self,
        buffer_samples: int = 4096,
        max_capture_rate_mhz: int = DEFAULT_MAX_CAPTURE_RATE_MHZ,
    ):
        self._buffer_samples = buffer_samples
        self._max_capture_rate_mhz = max_capture_rate_mhz
        self._sessions: Dict[int, _SessionBuffer] = {}
        self._open_taps: Dict[int, int] = {}
        self._next_session_id = 1
        self._lock = threading.Lock()

    # ============ 播放端 ============

    def open_session(self, sampling_rate: int = 44100) -> int:
        with self._lock:
            session_id = self._next_session_id
            self._next_session_id += 1
            self._sessions[session_id] = _SessionBuffer(self._buffer_samples, sampling_rate)

        app_logger.log_capture_event(
            "Audio session opened", {"session_id": session_id, "sampling_rate": sampling_rate}
        )
        return session_id

    def publish(self, session_id: int, pcm: np.ndarray) -> None:
        """发布一段解码后的 PCM（float，范围 [-1, 1]，多声道取平均）"""
        data = np.asarray(pcm, dtype=np.float32)
        if data.ndim > 1:
            data = data.mean(axis=1)
        data = np.clip(data, -1.0, 1.0)

        with self._lock:
            buffer = self._sessions.get(session_id)
            if buffer is None:
                raise CaptureSessionError(
                    f"Cannot publish to unknown audio session {session_id}",
                    session_id=session_id,
                )
            buffer.append(data)

    def close_session(self, session_id: int) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)

        if removed is not None:
            app_logger.log_capture_event("Audio session closed", {"session_id": session_id})

    def has_session(self, session_id: int) -> bool:
        with self._lock:
            return session_id in self._sessions

    def latest_samples(self, session_id: int, count: int) -> np.ndarray:
        with self._lock:
            buffer = self._sessions.get(session_id)
            if buffer is None:
                raise CaptureSessionError(
                    f"Audio session {session_id} is not open", session_id=session_id
                )
            return buffer.latest(count)

    def sampling_rate(self, session_id: int) -> int:
        with self._lock:
            buffer = self._sessions.get(session_id)
            return buffer.sampling_rate if buffer else 0

    # ============ 采集端 ============

    @property
    def max_capture_rate_mhz(self) -> int:
        return self._max_capture_rate_mhz

    def open_tap(self, session_id: int) -> "SessionTap":
        if session_id is None or session_id < 0 or not self.has_session(session_id):
            raise CaptureSessionError(
                f"Invalid audio session id: {session_id}", session_id=session_id
            )

        tap = SessionTap(self, session_id, self.sampling_rate(session_id))
        with self._lock:
            self._open_taps[session_id] = self._open_taps.get(session_id, 0) + 1
        return tap

    def open_tap_count(self, session_id: Optional[int] = None) -> int:
        """当前持有的采集句柄数量"""
        with self._lock:
            if session_id is None:
                return sum(self._open_taps.values())
            return self._open_taps.get(session_id, 0)

    def _release_tap(self, session_id: int) -> None:
        with self._lock:
            remaining = self._open_taps.get(session_id, 0) - 1
            if remaining > 0:
                self._open_taps[session_id] = remaining
            else:
                self._open_taps.pop(session_id, None)


class SessionTap(ICaptureTap):
    """某个音频会话上的采集句柄"""

    def __init__(self, registry: AudioSessionRegistry, session_id: int, sampling_rate: int):
        self._registry = registry
        self._session_id = session_id
        self._sampling_rate = sampling_rate
        self._enabled = False
        self._released = False

    @property
    def session_id(self) -> int:
        return self._session_id

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        if self._released and value:
            raise CaptureStateError("Cannot enable a released capture tap")
        self._enabled = bool(value)

    @property
    def sampling_rate(self) -> int:
        return self._sampling_rate

    @property
    def released(self) -> bool:
        return self._released

    def capture(self, capture_size: int) -> CaptureFrame:
        if self._released:
            raise CaptureStateError("Capture tap already released")

        samples = self._registry.latest_samples(self._session_id, capture_size)
        return CaptureFrame(
            waveform=quantize_waveform(samples),
            fft=pack_fft(samples),
            sampling_rate=self._sampling_rate,
        )

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._enabled = False
        self._registry._release_tap(self._session_id)
