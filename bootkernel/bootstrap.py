"""
启动引导 - 从配置构造内核
Bootstrap - builds a kernel from configuration.

加载配置、初始化日志，然后返回一个尚未启动的内核；
何时调用 boot() 由调用方决定。
Loads configuration, sets up logging and returns a kernel that has not been
booted yet; the caller decides when to boot it.
"""

from __future__ import annotations

from collections.abc import Mapping

from bootkernel.config.defaults import ENV_OVERRIDES, build_default_config
from bootkernel.config.manager import ConfigManager
from bootkernel.kernel.app_kernel import Kernel
from bootkernel.kernel.interface import EventSink
from bootkernel.kernel.logging import configure_logging, get_logger
from bootkernel.kernel.registrar import ServiceRegistrar
from bootkernel.kernel.signal_hub import SignalHub

logger = get_logger(__name__)


def load_config(
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigManager:
    """
    加载配置（文件 + 默认值 + 环境变量）
    Load configuration from file, defaults and environment variables.
    """
    config = ConfigManager(defaults=build_default_config(), config_path=config_path)
    config.load()
    config.apply_env_overrides(ENV_OVERRIDES, environ)
    return config


def create_kernel(
    config_path: str | None = None,
    registrar: ServiceRegistrar | None = None,
    event_sink: EventSink | None = None,
    environ: Mapping[str, str] | None = None,
) -> Kernel:
    """
    构造内核
    Create a kernel from configuration.

    Args:
        config_path: Optional JSON configuration file
        registrar: Registrar passed to the kernel
        event_sink: Event sink passed to the kernel (default: a new SignalHub)
        environ: Environment variables to read overrides from (default: os.environ)

    Returns:
        An un-booted Kernel
    """
    config = load_config(config_path, environ)
    configure_logging(config.get("logging", {}))

    if event_sink is None:
        event_sink = SignalHub()

    kernel = Kernel.from_config(config, registrar=registrar, event_sink=event_sink)
    logger.info(
        "内核已创建: environment=%s, debug=%s",
        kernel.environment.value,
        kernel.is_debug,
    )
    return kernel
