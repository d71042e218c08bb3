"""波形录制器测试"""
from datetime import datetime, timedelta

import numpy as np
import pytest

from sonicviz.audio import WaveformRecorder, build_output_name, sanitize_filename
from sonicviz.utils import RecordingError


class FailingStream:
    """write 总是失败的输出流"""

    def __init__(self):
        self.closed = False

    def write(self, data):
        raise OSError("No space left on device")

    def flush(self):
        pass

    def close(self):
        self.closed = True


def stepping_clock(start=datetime(2024, 1, 2, 3, 4, 5)):
    """每次调用前进一秒的时钟"""
    state = {"now": start - timedelta(seconds=1)}

    def clock():
        state["now"] += timedelta(seconds=1)
        return state["now"]

    return clock


class TestFilenames:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Hello World!", "Hello_World_"),
            ("track-01_final", "track-01_final"),
            ("héllo", "h_llo"),
            ("日本の歌", "____"),
            ("a/b\\c.d", "a_b_c_d"),
            ("", ""),
        ],
    )
    def test_sanitize_filename(self, title, expected):
        assert sanitize_filename(title) == expected

    def test_output_name_has_timestamp_suffix(self):
        name = build_output_name("My Song", datetime(2024, 1, 2, 3, 4, 5))

        assert name == "My_Song_20240102_030405.pcm"

    def test_empty_title_output_name(self):
        assert build_output_name("", datetime(2024, 1, 2, 3, 4, 5)) == "_20240102_030405.pcm"


class TestRecording:
    def test_start_creates_file_in_output_dir(self, tmp_path):
        recorder = WaveformRecorder(tmp_path / "out", clock=stepping_clock())

        path = recorder.start("Hello World!")

        assert recorder.is_recording
        assert path == tmp_path / "out" / "Hello_World__20240102_030405.pcm"
        assert path.exists()
        assert recorder.output_path == path
        recorder.stop()

    def test_appended_bytes_round_trip(self, recorder):
        buffers = [
            np.array([-1, 0, 127, -128], dtype=np.int8),
            np.array([5, -5], dtype=np.int8),
            np.arange(-64, 64, dtype=np.int8),
        ]

        path = recorder.start("song")
        for buffer in buffers:
            recorder.append(buffer)
        recorder.stop()

        expected = b"".join(buffer.tobytes() for buffer in buffers)
        assert path.read_bytes() == expected
        assert recorder.bytes_written == len(expected)

    def test_stop_is_idempotent(self, recorder):
        recorder.stop()
        recorder.start("song")
        recorder.stop()
        recorder.stop()

        assert not recorder.is_recording
        assert recorder.session is not None
        assert recorder.session.is_active is False

    def test_append_when_not_recording_raises(self, recorder):
        with pytest.raises(RecordingError):
            recorder.append(np.zeros(4, dtype=np.int8))

    def test_each_start_opens_new_session_file(self, tmp_path):
        recorder = WaveformRecorder(tmp_path, clock=stepping_clock())

        first = recorder.start("song")
        recorder.append(np.ones(3, dtype=np.int8))
        second = recorder.start("song")
        recorder.stop()

        assert first != second
        assert first.read_bytes() == b"\x01\x01\x01"
        assert second.read_bytes() == b""


class TestRecordingFailures:
    def test_open_failure_leaves_recorder_idle(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("occupied")
        recorder = WaveformRecorder(blocker)

        with pytest.raises(RecordingError):
            recorder.start("song")

        assert not recorder.is_recording
        assert recorder.output_path is None

    def test_write_failure_stops_recording(self, recorder):
        recorder.start("song")
        real_stream = recorder._stream
        real_stream.close()
        failing = FailingStream()
        recorder._stream = failing

        with pytest.raises(RecordingError) as exc_info:
            recorder.append(np.zeros(8, dtype=np.int8))

        assert not recorder.is_recording
        assert failing.closed
        assert isinstance(exc_info.value.original_exception, OSError)

        # 停止后再次 stop 不报错
        recorder.stop()
