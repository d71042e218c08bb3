"""波形录制器

把采集到的 int8 波形原样追加到文件，不加文件头，不分帧。
每个播放会话（一首歌的一次 播放→暂停）对应一个文件：

    {安全化标题}_{yyyyMMdd_HHmmss}.pcm
"""

import re
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional

import numpy as np

from ..utils import RecordingError, app_logger, logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
FILE_EXTENSION = ".pcm"


def sanitize_filename(title: str) -> str:
    """把 [A-Za-z0-9_-] 之外的每个字符替换成 '_'"""
    return _UNSAFE_CHARS.sub("_", title or "")


def build_output_name(title: str, started_at: datetime) -> str:
    return f"{sanitize_filename(title)}_{started_at.strftime(TIMESTAMP_FORMAT)}{FILE_EXTENSION}"


@dataclass
class RecordingSession:
    """一次录制会话"""

    output_path: Path
    started_at: datetime
    bytes_written: int = 0
    is_active: bool = True


class WaveformRecorder:
    """波形录制器

    同一时间最多只有一个打开的输出流。stop() 可在任意状态调用，
    不会抛出异常，因此 pause/release 路径可以放心调用。
    """

    def __init__(
        self,
        output_dir: Path,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._output_dir = Path(output_dir)
        self._clock = clock

        self._stream: Optional[BinaryIO] = None
        self._session: Optional[RecordingSession] = None
        self._opened_at = 0.0

    def start(self, base_name: str) -> Path:
        """打开新的输出文件

        已在录制时先关闭旧文件。

        Returns:
            输出文件路径

        Raises:
            RecordingError: 目录或文件无法创建，录制器保持未录制状态
        """
        if self.is_recording:
            self.stop()

        started_at = self._clock()
        output_path = self._output_dir / build_output_name(base_name, started_at)

        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            stream = open(output_path, "wb")
        except OSError as e:
            raise RecordingError(
                f"Failed to open recording file: {e}",
                context={"output_path": str(output_path)},
                original_exception=e,
            ) from e

        self._stream = stream
        self._session = RecordingSession(output_path=output_path, started_at=started_at)
        self._opened_at = time.perf_counter()

        app_logger.log_recorder_event(
            "Recording started", {"title": base_name, "output_path": str(output_path)}
        )
        return output_path

    def append(self, waveform: np.ndarray) -> None:
        """追加一帧原始波形

        Raises:
            RecordingError: 未在录制，或写入失败（写入失败时已自动 stop）
        """
        if self._stream is None or self._session is None:
            raise RecordingError("Recorder is not recording")

        data = np.asarray(waveform, dtype=np.int8).tobytes()
        try:
            self._stream.write(data)
        except OSError as e:
            output_path = self._session.output_path
            self.stop()
            raise RecordingError(
                f"Failed to write recording data: {e}",
                context={"output_path": str(output_path)},
                original_exception=e,
            ) from e

        self._session.bytes_written += len(data)

    def stop(self) -> None:
        """刷新并关闭输出文件；未在录制时什么都不做"""
        stream = self._stream
        session = self._session
        if stream is None or session is None:
            return

        self._stream = None
        session.is_active = False

        try:
            stream.flush()
        except OSError as e:
            app_logger.log_error(e, "recorder_flush", {"output_path": str(session.output_path)})
        finally:
            try:
                stream.close()
            except OSError as e:
                app_logger.log_error(e, "recorder_close", {"output_path": str(session.output_path)})

        app_logger.log_recorder_event(
            "Recording stopped",
            {
                "output_path": str(session.output_path),
                "bytes_written": session.bytes_written,
            },
        )
        logger.performance(
            "recording_session",
            time.perf_counter() - self._opened_at,
            {"bytes_written": session.bytes_written},
        )

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    @property
    def session(self) -> Optional[RecordingSession]:
        """最近一次录制会话（停止后仍可查询）"""
        return self._session

    @property
    def output_path(self) -> Optional[Path]:
        return self._session.output_path if self._session else None

    @property
    def bytes_written(self) -> int:
        return self._session.bytes_written if self._session else 0

    @property
    def output_dir(self) -> Path:
        return self._output_dir
