"""音频模块初始化"""

from .capture_source import CaptureSource, capture_interval_ms
from .frame import CaptureFrame
from .frame_router import FrameRouter
from .recorder import RecordingSession, WaveformRecorder, build_output_name, sanitize_filename
from .session_tap import AudioSessionRegistry, SessionTap, pack_fft, quantize_waveform

__all__ = [
    "CaptureSource",
    "capture_interval_ms",
    "CaptureFrame",
    "FrameRouter",
    "RecordingSession",
    "WaveformRecorder",
    "build_output_name",
    "sanitize_filename",
    "AudioSessionRegistry",
    "SessionTap",
    "pack_fft",
    "quantize_waveform",
]
