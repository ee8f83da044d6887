"""
服务容器 - 默认的服务定位器
Service container - the default service locator.

按字符串标识注册工厂，首次获取时构造服务；共享服务构造后缓存。
Factories are registered under string identifiers and constructed on first
lookup; shared services are cached after construction.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from enum import Enum, auto
from typing import Any

from bootkernel.kernel.errors import ServiceNotFoundError

logger = logging.getLogger(__name__)


class Lifecycle(Enum):
    """服务生命周期类型 / Service lifecycle type."""

    # 单例：首次构造后缓存
    SINGLETON = auto()
    # 瞬态：每次获取创建新实例
    TRANSIENT = auto()


def _accepts_container(factory: Callable[..., Any]) -> bool:
    """Whether the factory requires the container as its single argument."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # builtins without introspectable signatures are treated as zero-arg
        return False

    for parameter in signature.parameters.values():
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            return True
    return False


class ServiceDescriptor:
    """
    服务描述符 - 记录如何创建和管理一个服务
    Service descriptor - records how to create and manage a service.
    """

    __slots__ = ("factory", "lifecycle", "instance", "constructed", "wants_container")

    def __init__(
        self,
        factory: Callable[..., Any],
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ):
        self.factory = factory
        self.lifecycle = lifecycle
        self.instance: Any = None
        # None is a valid service value, so construction is tracked separately
        self.constructed = False
        self.wants_container = _accepts_container(factory)


class ServiceContainer:
    """
    服务容器 - 默认的 IoC 容器
    Service container - the default IoC container.

    支持：
    - 按标识注册和获取服务
    - 别名（多个别名指向同一个标识）
    - 单例/瞬态生命周期
    - 工厂可接收容器本身以解析其他服务
    """

    def __init__(self) -> None:
        # 按标识索引的服务描述符
        self._registry: dict[str, ServiceDescriptor] = {}
        # 别名 -> 标识
        self._aliases: dict[str, str] = {}
        # 可重入锁：工厂内部可以再次调用 get()
        self._lock = threading.RLock()

    def add(
        self,
        service_id: str,
        factory: Callable[..., Any],
        shared: bool = False,
    ) -> None:
        """
        注册一个服务到容器
        Register a service into the container.

        Registering an existing identifier replaces its descriptor.
        """
        lifecycle = Lifecycle.SINGLETON if shared else Lifecycle.TRANSIENT
        with self._lock:
            self._registry[service_id] = ServiceDescriptor(factory, lifecycle)

        logger.debug("已注册服务: 标识=%s, 生命周期=%s", service_id, lifecycle.name)

    def add_alias(self, service_id: str, alias: str) -> None:
        """
        为已有标识添加别名
        Point an alias at a service identifier.
        """
        with self._lock:
            self._aliases[alias] = service_id

        logger.debug("已注册别名: %s -> %s", alias, service_id)

    def has(self, service_id: str) -> bool:
        """检查是否注册了指定标识或别名 / Check if an identifier or alias is registered."""
        return self._resolve_id(service_id) in self._registry

    def get(self, service_id: str) -> Any:
        """
        按标识或别名解析服务
        Resolve a service by identifier or alias.

        Raises:
            ServiceNotFoundError: if nothing is registered under the identifier
        """
        descriptor = self._registry.get(self._resolve_id(service_id))
        if descriptor is None:
            raise ServiceNotFoundError(service_id)
        return self._create_instance(descriptor)

    def ids(self) -> list[str]:
        """获取所有注册的标识 / Get all registered identifiers."""
        return list(self._registry.keys())

    def aliases(self) -> dict[str, str]:
        """获取所有别名 / Get the alias table."""
        return dict(self._aliases)

    def _resolve_id(self, service_id: str) -> str:
        return self._aliases.get(service_id, service_id)

    def _create_instance(self, descriptor: ServiceDescriptor) -> Any:
        """
        根据描述符创建或获取服务实例
        Create or retrieve a service instance based on the descriptor.
        """
        # 单例：复用已有实例
        if descriptor.lifecycle == Lifecycle.SINGLETON and descriptor.constructed:
            return descriptor.instance

        with self._lock:
            # 双重检查（防止并发重复创建）
            if descriptor.lifecycle == Lifecycle.SINGLETON and descriptor.constructed:
                return descriptor.instance

            if descriptor.wants_container:
                instance = descriptor.factory(self)
            else:
                instance = descriptor.factory()

            if descriptor.lifecycle == Lifecycle.SINGLETON:
                descriptor.instance = instance
                descriptor.constructed = True

            return instance
