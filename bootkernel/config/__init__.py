"""
配置模块 - 管理内核配置
Config module - manages kernel configuration.
"""

from bootkernel.config.defaults import ENV_OVERRIDES, build_default_config
from bootkernel.config.manager import ConfigManager

__all__ = ["ConfigManager", "build_default_config", "ENV_OVERRIDES"]
