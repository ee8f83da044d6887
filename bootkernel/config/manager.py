"""
配置管理器 - 读取和合并配置
Config manager - reads and merges configuration.

使用 JSON 文件存储，支持默认值合并和嵌套键访问。
Uses JSON file storage with default value merging and nested key access.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    配置管理器 - 内核的配置中心
    Config manager - the configuration center of the kernel.

    支持：
    - 嵌套键访问（如 "kernel.debug"）
    - 默认值自动合并
    - 环境变量覆盖
    """

    def __init__(
        self,
        defaults: dict[str, Any] | None = None,
        config_path: str | None = None,
    ) -> None:
        self._defaults = defaults or {}
        self._config: dict[str, Any] = copy.deepcopy(self._defaults)
        self._config_path = config_path

    def load(self) -> None:
        """
        加载配置文件
        Load configuration file.

        A missing file means defaults only; an unreadable one, or one whose
        top level is not a JSON object, is logged and ignored.
        """
        self._config = {}

        if self._config_path and os.path.exists(self._config_path):
            try:
                with open(self._config_path, encoding="utf-8") as f:
                    loaded = json.load(f)
            except (json.JSONDecodeError, OSError):
                logger.warning("加载配置失败，使用默认值: %s", self._config_path)
            else:
                if isinstance(loaded, dict):
                    self._config = loaded
                    logger.info("配置已从 %s 加载", self._config_path)
                else:
                    logger.warning(
                        "配置文件顶层必须是 JSON 对象，使用默认值: %s", self._config_path
                    )
        elif self._config_path:
            logger.info("未找到配置文件 %s，使用默认配置", self._config_path)

        # 合并默认值
        self._merge_defaults(self._config, self._defaults)

    def apply_env_overrides(
        self,
        overrides: Mapping[str, str],
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        用环境变量覆盖配置
        Override config values from environment variables.

        Args:
            overrides: variable name -> dotted config key
            environ: variables to read (default: os.environ)
        """
        environ = os.environ if environ is None else environ
        for variable, key in overrides.items():
            value = environ.get(variable)
            if value is not None and value != "":
                self.set(key, value)
                logger.debug("配置 %s 被环境变量 %s 覆盖", key, variable)

    def get(self, key: str, default: Any = None) -> Any:
        """
        按点分路径读取配置，如 "kernel.debug"
        Read a value by dotted path; missing or null values yield ``default``.
        """
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """按点分路径写入配置，中间节点不是字典时被替换"""
        *parents, leaf = key.split(".")
        node = self._config
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value

    @classmethod
    def _merge_defaults(cls, config: dict[str, Any], defaults: Mapping[str, Any]) -> None:
        """Fill keys missing from ``config`` with copies of ``defaults``."""
        for key, fallback in defaults.items():
            if key not in config:
                config[key] = copy.deepcopy(fallback)
            elif isinstance(config[key], dict) and isinstance(fallback, dict):
                cls._merge_defaults(config[key], fallback)
