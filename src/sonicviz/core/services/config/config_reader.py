"""配置读取服务 - 单一职责：配置读取和查询"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar

from ....utils import app_logger
from .config_defaults import get_default_config

T = TypeVar("T")


def default_config_dir() -> Path:
    """默认配置目录: %APPDATA%/SonicViz"""
    return Path(os.getenv("APPDATA", Path.home())) / "SonicViz"


class ConfigReader:
    """配置读取器 - 只负责读取配置"""

    def __init__(self, config_path: Optional[Path] = None):
        """初始化配置读取器

        Args:
            config_path: 配置文件路径，None 使用默认目录下的 config.json
        """
        self.config_path = Path(config_path) if config_path else default_config_dir() / "config.json"
        self._default_config = get_default_config()
        self._config: Dict[str, Any] = copy.deepcopy(self._default_config)

    def load_config(self) -> bool:
        """从文件加载配置

        Returns:
            是否加载成功（文件不存在视为成功，使用默认配置）
        """
        try:
            if self.config_path.exists():
                with open(self.config_path, "r", encoding="utf-8") as f:
                    loaded_config = json.load(f)

                self._config = self._merge_configs(self._default_config, loaded_config)

                app_logger.info(
                    "Configuration loaded",
                    context={
                        "config_path": str(self.config_path),
                        "keys_loaded": len(loaded_config),
                    },
                    component="config",
                )
            else:
                self._config = copy.deepcopy(self._default_config)
                app_logger.info(
                    "Using default configuration",
                    context={"config_path": str(self.config_path)},
                    component="config",
                )

            return True

        except (OSError, json.JSONDecodeError) as e:
            app_logger.log_error(e, "config_reader_load")
            self._config = copy.deepcopy(self._default_config)
            return False

    def get_setting(self, key: str, default: Optional[T] = None) -> T:
        """获取配置项

        Args:
            key: 配置项键名，支持嵌套路径 (例如: "capture.size")
            default: 默认值

        Returns:
            配置项的值，如果不存在则返回默认值
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set_setting(self, key: str, value: Any) -> None:
        """仅修改内存中的配置（不写回文件）"""
        keys = key.split(".")
        node = self._config
        for k in keys[:-1]:
            node = node.setdefault(k, {})
        node[keys[-1]] = value

    def get_all_settings(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def _merge_configs(self, default: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
        """递归合并配置，loaded 中的值覆盖默认值"""
        result = copy.deepcopy(default)

        for key, value in loaded.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
