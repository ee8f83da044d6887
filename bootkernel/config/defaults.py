"""
默认配置 - 内核的所有默认配置值
Default configuration - all default configuration values of the kernel.
"""

from __future__ import annotations

from typing import Any

# 环境变量覆盖 / environment variable overrides: variable -> dotted key
ENV_OVERRIDES = {
    "BOOTKERNEL_ENV": "kernel.environment",
    "BOOTKERNEL_DEBUG": "kernel.debug",
    "BOOTKERNEL_LOG_LEVEL": "logging.level",
}


def build_default_config() -> dict[str, Any]:
    """
    构建默认配置
    Build the default configuration.
    """
    return {
        # 内核配置
        "kernel": {
            "environment": "production",
            "debug": False,
        },
        # 日志配置
        "logging": {
            "level": "INFO",
            # None 表示只输出到控制台
            "log_dir": None,
        },
    }
