"""配置默认值定义 - 单一职责：提供默认配置"""

from typing import Any, Dict


def get_default_config() -> Dict[str, Any]:
    """获取默认配置

    Returns:
        默认配置字典
    """
    return {
        "capture": {
            "size": 512,  # 必须是2的幂次
            "frame_rate_hint_mhz": None,  # None = 平台最大采集率
            "max_capture_rate_mhz": 20000,
        },
        "animation": {
            "duration_ms": 150,
            "frame_interval_ms": 16,
            "rotation_period_ms": 10000,
            "animated_points": 128,
        },
        "render": {
            "drawing_mode": "both",  # waveform | spectrum | both
            "bar_width": 4.0,
            "bar_space": 1.0,
            "bar_max_points": 128,
            "bar_corner_radius": 3.0,
            "circle_points": 64,
            "circle_floor": 0.3,
            "circle_gain": 0.7,
            "waveform_divisor": 128.0,
            "spectrum_exponent": 1.5,
            "stroke_width": 3.0,
            "colors": {
                "waveform_start": "#4CAF50",
                "waveform_end": "#00BCD4",
                "spectrum_start": "#FF5722",
                "spectrum_end": "#FFEB3B",
                "background": ["#00574B", "#003840", "#002030"],
            },
        },
        "recorder": {
            "output_dir": "auto",  # auto = <config dir>/recordings
        },
        "progress": {
            "interval_ms": 100,
        },
        "logging": {
            "level": "INFO",
            "console_output": False,
            "enabled_categories": [
                "capture",
                "recorder",
                "animation",
                "render",
                "lifecycle",
                "playback",
                "config",
                "startup",
                "error",
                "performance",
            ],
        },
    }
