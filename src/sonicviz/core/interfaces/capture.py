"""音频采集接口定义"""

from abc import ABC, abstractmethod

import numpy as np


class IFrameConsumer(ABC):
    """采集帧的消费者

    CaptureSource 在每次采集回调中依次调用 on_waveform 和 on_spectrum，
    两次投递相互独立；实现必须很快返回，否则会拖慢动画和进度回调。
    """

    @abstractmethod
    def on_waveform(self, waveform: np.ndarray, sampling_rate: int) -> None:
        """收到一帧 int8 时域波形"""
        pass

    @abstractmethod
    def on_spectrum(self, fft: np.ndarray, sampling_rate: int) -> None:
        """收到一帧 int8 频谱数据"""
        pass


class ICaptureTap(ABC):
    """平台音频会话的采集句柄"""

    @property
    @abstractmethod
    def session_id(self) -> int:
        pass

    @property
    @abstractmethod
    def enabled(self) -> bool:
        pass

    @enabled.setter
    @abstractmethod
    def enabled(self, value: bool) -> None:
        pass

    @property
    @abstractmethod
    def sampling_rate(self) -> int:
        """采样率（Hz）"""
        pass

    @abstractmethod
    def capture(self, capture_size: int):
        """抓取最近 capture_size 个采样，返回 CaptureFrame"""
        pass

    @abstractmethod
    def release(self) -> None:
        """释放句柄，可重复调用"""
        pass


class ITapProvider(ABC):
    """按音频会话ID打开采集句柄"""

    @property
    @abstractmethod
    def max_capture_rate_mhz(self) -> int:
        """平台支持的最大采集率（毫赫兹）"""
        pass

    @abstractmethod
    def open_tap(self, session_id: int) -> ICaptureTap:
        """打开采集句柄

        Raises:
            CaptureSessionError: 会话ID无效或会话已关闭
        """
        pass
