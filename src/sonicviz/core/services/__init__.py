"""核心服务：配置与调度"""

from .config import ConfigKeys, ConfigReader, VisualizerConfig, load_visualizer_config

__all__ = [
    "ConfigKeys",
    "ConfigReader",
    "VisualizerConfig",
    "load_visualizer_config",
]
