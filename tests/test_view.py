"""可视化视图测试"""
import numpy as np
import pytest

from sonicviz.visual import DrawingMode, RoundedBars, StrokePath


def _frame(value, size=512):
    return np.full(size, value, dtype=np.int8)


class TestFrameConsumption:
    def test_frames_are_smoothed_to_targets(self, view, scheduler):
        view.on_waveform(_frame(64), 44100)
        view.on_spectrum(_frame(-51), 44100)
        assert view.is_animating

        scheduler.advance(200)

        assert not view.is_animating
        np.testing.assert_array_equal(view.signal.waveform, np.full(128, 64.0))
        np.testing.assert_allclose(view.signal.spectrum, np.full(128, 51 / 255.0))

    def test_smoothing_requests_redraws(self, view, scheduler, surface):
        view.cancel_pending_animation()
        before = surface.redraw_count

        view.on_waveform(_frame(10), 44100)
        scheduler.advance(48)

        assert surface.redraw_count > before

    def test_new_frame_restarts_interpolation(self, view, scheduler):
        view.on_spectrum(_frame(127), 44100)
        scheduler.advance(80)
        mid = view.signal.spectrum[0]

        view.on_spectrum(_frame(0), 44100)
        scheduler.advance(16)

        # 从当前值出发向新目标靠近，而不是从 0 或旧目标重新开始
        assert 0.0 < view.signal.spectrum[0] < mid


class TestRotation:
    def test_rotation_runs_without_new_frames(self, view, scheduler, surface):
        scheduler.advance(1000)

        assert view.is_rotating
        assert view.signal.rotation_angle > 0.0
        assert surface.redraw_count > 0


class TestRendering:
    def test_render_uses_surface_viewport(self, view):
        commands = view.render()

        assert len(commands) > 0

    def test_drawing_mode_switch(self, view):
        view.set_drawing_mode("spectrum")

        commands = view.render()

        assert view.drawing_mode == DrawingMode.SPECTRUM
        assert not any(isinstance(c, StrokePath) for c in commands)
        assert any(isinstance(c, RoundedBars) for c in commands)

    def test_unknown_drawing_mode_is_rejected(self, view):
        with pytest.raises(ValueError):
            view.set_drawing_mode("sparkles")

    def test_color_change_requests_redraw(self, view, surface):
        before = surface.redraw_count

        view.set_waveform_colors("#FFFFFF", "#000000")
        view.set_spectrum_colors("#FFFFFF", "#000000")

        assert surface.redraw_count == before + 2
        assert view.renderer.waveform_colors == ("#FFFFFF", "#000000")


class TestRelease:
    def test_cancel_pending_animation_keeps_rotation(self, view):
        view.on_waveform(_frame(10), 44100)

        view.cancel_pending_animation()

        assert not view.is_animating
        assert view.is_rotating

    def test_release_cancels_all_animations(self, view, scheduler, surface):
        view.on_waveform(_frame(10), 44100)

        view.release()
        view.release()
        count = surface.redraw_count
        scheduler.advance(1000)

        assert view.is_released
        assert not view.is_animating
        assert not view.is_rotating
        assert surface.redraw_count == count
        assert scheduler.active_tasks() == []

    def test_frames_after_release_are_ignored(self, view, scheduler):
        view.release()

        view.on_waveform(_frame(100), 44100)
        scheduler.advance(200)

        assert np.all(view.signal.waveform == 0)
