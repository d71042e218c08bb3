"""音频会话采集点测试"""
import numpy as np
import pytest

from sonicviz.audio import AudioSessionRegistry, pack_fft, quantize_waveform
from sonicviz.utils import CaptureSessionError, CaptureStateError


class TestQuantization:
    """量化与 FFT 打包"""

    def test_quantize_waveform_scales_to_int8(self):
        result = quantize_waveform(np.array([0.0, 1.0, -1.0, 0.5]))

        assert result.dtype == np.int8
        assert result.tolist() == [0, 127, -127, 64]

    def test_quantize_waveform_clips_out_of_range(self):
        result = quantize_waveform(np.array([2.0, -3.0]))

        assert result.tolist() == [127, -128]

    def test_pack_fft_dc_component(self):
        packed = pack_fft(np.full(8, 0.5))

        assert packed.dtype == np.int8
        assert len(packed) == 8
        assert packed[0] == 127
        assert np.all(packed[1:] == 0)

    def test_pack_fft_places_bin_one_after_nyquist(self):
        n = 8
        samples = np.cos(2 * np.pi * np.arange(n) / n)

        packed = pack_fft(samples)

        # [Re0, Re(n/2), Re1, Im1, ...]
        assert packed[0] == 0
        assert packed[1] == 0
        assert packed[2] == 127
        assert packed[3] == 0

    def test_pack_fft_empty_input(self):
        assert len(pack_fft(np.array([]))) == 0


class TestAudioSessionRegistry:
    """会话注册与采集句柄计数"""

    def test_session_ids_are_positive_and_unique(self, registry):
        first = registry.open_session()
        second = registry.open_session()

        assert first >= 1
        assert second != first
        assert registry.has_session(first)

    def test_open_tap_with_invalid_session_raises(self, registry):
        with pytest.raises(CaptureSessionError) as exc_info:
            registry.open_tap(-1)

        assert exc_info.value.session_id == -1
        assert registry.open_tap_count() == 0

    def test_open_tap_with_unknown_session_raises(self, registry):
        with pytest.raises(CaptureSessionError):
            registry.open_tap(999)

    def test_publish_to_unknown_session_raises(self, registry):
        with pytest.raises(CaptureSessionError):
            registry.publish(42, np.zeros(16))

    def test_closed_session_cannot_be_tapped(self, registry):
        sid = registry.open_session()
        registry.close_session(sid)

        with pytest.raises(CaptureSessionError):
            registry.open_tap(sid)

    def test_stereo_pcm_is_averaged(self, registry):
        sid = registry.open_session()
        registry.publish(sid, np.array([[1.0, 0.0], [0.5, 0.5]]))

        samples = registry.latest_samples(sid, 2)

        np.testing.assert_allclose(samples, [0.5, 0.5])

    def test_max_capture_rate(self):
        assert AudioSessionRegistry().max_capture_rate_mhz == 20000
        assert AudioSessionRegistry(max_capture_rate_mhz=1000).max_capture_rate_mhz == 1000


class TestSessionTap:
    """采集句柄"""

    def test_capture_returns_frame_of_requested_size(self, registry, session_id):
        tap = registry.open_tap(session_id)

        frame = tap.capture(512)

        assert frame.size == 512
        assert len(frame.fft) == 512
        assert frame.sampling_rate == 44100
        assert frame.waveform.dtype == np.int8
        assert np.any(frame.waveform != 0)

    def test_capture_pads_missing_history_with_silence(self, registry):
        sid = registry.open_session()
        registry.publish(sid, np.ones(10))
        tap = registry.open_tap(sid)

        frame = tap.capture(16)

        assert frame.waveform[:6].tolist() == [0] * 6
        assert frame.waveform[6:].tolist() == [127] * 10

    def test_frame_arrays_are_read_only(self, registry, session_id):
        frame = registry.open_tap(session_id).capture(64)

        with pytest.raises(ValueError):
            frame.waveform[0] = 1

    def test_release_is_idempotent(self, registry, session_id):
        tap = registry.open_tap(session_id)
        assert registry.open_tap_count(session_id) == 1

        tap.release()
        tap.release()

        assert tap.released
        assert registry.open_tap_count(session_id) == 0

    def test_released_tap_cannot_be_enabled_or_captured(self, registry, session_id):
        tap = registry.open_tap(session_id)
        tap.release()

        with pytest.raises(CaptureStateError):
            tap.enabled = True
        with pytest.raises(CaptureStateError):
            tap.capture(64)

        # 关闭总是允许
        tap.enabled = False
