"""配置读取与 VisualizerConfig 构建测试"""
import json
from pathlib import Path

import pytest

from sonicviz.core.services.config import (
    CaptureSettings,
    ConfigKeys,
    ConfigReader,
    RenderSettings,
    VisualizerConfig,
    is_power_of_two,
    load_visualizer_config,
)
from sonicviz.utils import CaptureConfigurationError, LogLevel, logger


def _write_config(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestConfigReader:
    def test_missing_file_uses_defaults(self, tmp_path):
        reader = ConfigReader(tmp_path / "missing.json")

        assert reader.load_config() is True
        assert reader.get_setting(ConfigKeys.CAPTURE_SIZE) == 512
        assert reader.get_setting(ConfigKeys.RENDER_DRAWING_MODE) == "both"

    def test_loaded_values_merge_with_defaults(self, tmp_path):
        path = _write_config(tmp_path / "config.json", {"capture": {"size": 1024}})
        reader = ConfigReader(path)

        reader.load_config()

        assert reader.get_setting(ConfigKeys.CAPTURE_SIZE) == 1024
        assert reader.get_setting(ConfigKeys.CAPTURE_MAX_RATE_MHZ) == 20000

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        reader = ConfigReader(path)

        assert reader.load_config() is False
        assert reader.get_setting(ConfigKeys.CAPTURE_SIZE) == 512

    def test_unknown_key_returns_default(self, tmp_path):
        reader = ConfigReader(tmp_path / "config.json")

        assert reader.get_setting("capture.nope", "fallback") == "fallback"
        assert reader.get_setting("capture.size.deeper") is None

    def test_set_setting_creates_nested_keys(self, tmp_path):
        reader = ConfigReader(tmp_path / "config.json")

        reader.set_setting("custom.section.value", 3)

        assert reader.get_setting("custom.section.value") == 3
        assert reader.get_all_settings()["custom"] == {"section": {"value": 3}}


class TestSettingsValidation:
    @pytest.mark.parametrize("size", [1, 2, 128, 512, 1024])
    def test_power_of_two_sizes_are_accepted(self, size):
        assert is_power_of_two(size)
        assert CaptureSettings(capture_size=size).capture_size == size

    @pytest.mark.parametrize("size", [0, -4, 3, 500, 1000])
    def test_other_sizes_are_rejected(self, size):
        with pytest.raises(CaptureConfigurationError):
            CaptureSettings(capture_size=size)

    def test_non_positive_rate_hint_is_rejected(self):
        with pytest.raises(CaptureConfigurationError):
            CaptureSettings(frame_rate_hint_mhz=0)

    def test_unknown_drawing_mode_is_rejected(self):
        with pytest.raises(CaptureConfigurationError):
            RenderSettings(drawing_mode="sparkles")


class TestVisualizerConfig:
    def test_defaults_from_reader(self, tmp_path):
        reader = ConfigReader(tmp_path / "config.json")

        config = VisualizerConfig.from_reader(reader)

        assert config.capture.capture_size == 512
        assert config.capture.frame_rate_hint_mhz is None
        assert config.animation.duration_ms == 150
        assert config.render.circle_points == 64
        assert config.render.spectrum_colors == ("#FF5722", "#FFEB3B")
        assert config.progress.interval_ms == 100

    def test_auto_output_dir_is_beside_config(self, tmp_path):
        reader = ConfigReader(tmp_path / "config.json")

        config = VisualizerConfig.from_reader(reader)

        assert config.recorder.output_dir == tmp_path / "recordings"

    def test_explicit_output_dir(self, tmp_path):
        target = tmp_path / "elsewhere"
        path = _write_config(tmp_path / "config.json", {"recorder": {"output_dir": str(target)}})
        reader = ConfigReader(path)
        reader.load_config()

        config = VisualizerConfig.from_reader(reader)

        assert config.recorder.output_dir == target

    def test_custom_colors_and_mode(self, tmp_path):
        path = _write_config(
            tmp_path / "config.json",
            {"render": {"drawing_mode": "SPECTRUM", "colors": {"waveform_start": "#123456"}}},
        )
        reader = ConfigReader(path)
        reader.load_config()

        config = VisualizerConfig.from_reader(reader)

        assert config.render.drawing_mode == "spectrum"
        assert config.render.waveform_colors == ("#123456", "#00BCD4")

    def test_invalid_capture_size_in_file_raises(self, tmp_path):
        path = _write_config(tmp_path / "config.json", {"capture": {"size": 500}})
        reader = ConfigReader(path)
        reader.load_config()

        with pytest.raises(CaptureConfigurationError):
            VisualizerConfig.from_reader(reader)

    def test_load_visualizer_config(self, tmp_path):
        path = _write_config(
            tmp_path / "config.json",
            {"animation": {"duration_ms": 300}, "logging": {"level": "DEBUG"}},
        )

        try:
            config = load_visualizer_config(path)

            assert config.animation.duration_ms == 300
            assert config.recorder.output_dir == tmp_path / "recordings"
            assert logger.get_log_level() == LogLevel.DEBUG
        finally:
            logger.set_log_level(LogLevel.INFO)
