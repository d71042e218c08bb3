"""采集源测试"""
import pytest

from sonicviz.audio import CaptureSource, capture_interval_ms
from sonicviz.core.interfaces import IFrameConsumer
from sonicviz.utils import CaptureConfigurationError, CaptureSessionError, CaptureStateError


class RecordingConsumer(IFrameConsumer):
    """记录收到的帧"""

    def __init__(self, fail_waveform=False):
        self.waveforms = []
        self.spectra = []
        self.fail_waveform = fail_waveform

    def on_waveform(self, waveform, sampling_rate):
        if self.fail_waveform:
            raise RuntimeError("consumer failure")
        self.waveforms.append(waveform)

    def on_spectrum(self, fft, sampling_rate):
        self.spectra.append(fft)


@pytest.fixture
def source(registry, scheduler):
    source = CaptureSource(registry, scheduler)
    yield source
    source.release()


class TestCaptureInterval:
    """采集周期：min(最大采集率, 期望值) / 2"""

    def test_default_rate_is_half_of_maximum(self):
        assert capture_interval_ms(20000) == pytest.approx(100.0)

    def test_lower_hint_slows_capture(self):
        assert capture_interval_ms(20000, 10000) == pytest.approx(200.0)

    def test_hint_above_maximum_is_capped(self):
        assert capture_interval_ms(20000, 60000) == pytest.approx(100.0)


class TestAttach:
    def test_attach_opens_single_tap(self, source, registry, session_id):
        assert source.attach(session_id, 512) is True

        assert source.is_attached
        assert not source.is_enabled
        assert registry.open_tap_count() == 1

    def test_non_power_of_two_size_is_rejected(self, source, registry, session_id):
        with pytest.raises(CaptureConfigurationError):
            source.attach(session_id, 500)

        assert not source.is_attached
        assert registry.open_tap_count() == 0

    def test_invalid_session_is_rejected(self, source, registry):
        with pytest.raises(CaptureSessionError):
            source.attach(-1, 512)

        assert registry.open_tap_count() == 0

    def test_reattach_releases_previous_tap(self, source, registry, session_id):
        source.attach(session_id, 512)
        source.attach(session_id, 256)

        assert registry.open_tap_count() == 1
        assert source.capture_size == 256

    def test_enable_before_attach_raises(self, source):
        with pytest.raises(CaptureStateError):
            source.enable()


class TestDelivery:
    def test_enabled_source_delivers_both_channels(self, source, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 512, consumer=consumer)
        source.enable()

        scheduler.advance(100)

        assert len(consumer.waveforms) == 1
        assert len(consumer.spectra) == 1
        assert len(consumer.waveforms[0]) == 512
        assert len(consumer.spectra[0]) == 512

    def test_rate_hint_controls_cadence(self, source, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 128, frame_rate_hint_mhz=10000, consumer=consumer)
        source.enable()

        scheduler.advance(1000)

        assert len(consumer.spectra) == 5

    def test_configured_maximum_below_platform_slows_cadence(self, source, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 128, consumer=consumer, max_capture_rate_mhz=10000)
        source.enable()

        scheduler.advance(1000)

        assert len(consumer.spectra) == 5

    def test_configured_maximum_above_platform_is_ignored(self, source, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 128, consumer=consumer, max_capture_rate_mhz=60000)
        source.enable()

        scheduler.advance(1000)

        assert len(consumer.spectra) == 10

    def test_non_positive_maximum_is_rejected(self, source, registry, session_id):
        with pytest.raises(CaptureConfigurationError):
            source.attach(session_id, 512, max_capture_rate_mhz=0)

        assert not source.is_attached
        assert registry.open_tap_count() == 0

    def test_failing_waveform_callback_does_not_block_spectrum(
        self, source, scheduler, session_id
    ):
        consumer = RecordingConsumer(fail_waveform=True)
        source.attach(session_id, 512, consumer=consumer)
        source.enable()

        scheduler.advance(300)

        assert len(consumer.spectra) == 3
        assert source.frames_delivered == 3

    def test_disable_stops_delivery_but_keeps_tap(self, source, registry, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 512, consumer=consumer)
        source.enable()
        scheduler.advance(200)

        source.disable()
        scheduler.advance(500)

        assert len(consumer.waveforms) == 2
        assert not source.is_enabled
        assert registry.open_tap_count() == 1

    def test_consumer_can_be_swapped(self, source, scheduler, session_id):
        first, second = RecordingConsumer(), RecordingConsumer()
        source.attach(session_id, 512, consumer=first)
        source.enable()
        scheduler.advance(100)

        source.set_consumer(second)
        scheduler.advance(100)
        source.set_consumer(None)
        scheduler.advance(100)

        assert len(first.waveforms) == 1
        assert len(second.waveforms) == 1
        assert source.frames_delivered == 3

    def test_reenable_resumes_delivery(self, source, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 512, consumer=consumer)
        source.enable()
        source.disable()

        source.enable()
        scheduler.advance(100)

        assert len(consumer.waveforms) == 1


class TestRelease:
    def test_release_without_enable_frees_tap(self, source, registry, session_id):
        source.attach(session_id, 512)

        source.release()

        assert registry.open_tap_count() == 0
        assert not source.is_attached

    def test_release_is_idempotent(self, source, registry, scheduler, session_id):
        consumer = RecordingConsumer()
        source.attach(session_id, 512, consumer=consumer)
        source.enable()

        source.release()
        source.release()
        scheduler.advance(500)

        assert registry.open_tap_count() == 0
        assert consumer.waveforms == []
        assert scheduler.active_tasks() == []
