"""配置服务模块"""

from .config_defaults import get_default_config
from .config_keys import ConfigKeys
from .config_reader import ConfigReader, default_config_dir
from .visualizer_config import (
    AnimationSettings,
    CaptureSettings,
    ProgressSettings,
    RecorderSettings,
    RenderSettings,
    VisualizerConfig,
    is_power_of_two,
    load_visualizer_config,
)

__all__ = [
    "get_default_config",
    "ConfigKeys",
    "ConfigReader",
    "default_config_dir",
    "AnimationSettings",
    "CaptureSettings",
    "ProgressSettings",
    "RecorderSettings",
    "RenderSettings",
    "VisualizerConfig",
    "is_power_of_two",
    "load_visualizer_config",
]
