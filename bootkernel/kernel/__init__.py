"""
微内核模块 - 启动引导的最小化核心
Microkernel module - the minimal core of the bootstrap runtime.

包含内核生命周期、服务容器、注册器和信号中枢。
Contains the kernel lifecycle, service container, registrar and signal hub.
"""

from bootkernel.kernel.app_kernel import Kernel, KernelState
from bootkernel.kernel.container import ServiceContainer
from bootkernel.kernel.definition import ServiceDefinition
from bootkernel.kernel.environment import Environment
from bootkernel.kernel.errors import (
    ContainerInaccessibleError,
    KernelError,
    KernelLifecycleError,
    ReservedServiceError,
    ServiceNotFoundError,
)
from bootkernel.kernel.interface import EventSink, KernelInterface, Locator
from bootkernel.kernel.registrar import DefaultServiceRegistrar, ServiceRegistrar
from bootkernel.kernel.signal_hub import (
    KernelBooted,
    KernelBooting,
    KernelEvent,
    KernelEventKind,
    SignalHub,
)

__all__ = [
    "Kernel",
    "KernelState",
    "KernelInterface",
    "Environment",
    "ServiceDefinition",
    "ServiceContainer",
    "ServiceRegistrar",
    "DefaultServiceRegistrar",
    "Locator",
    "EventSink",
    "SignalHub",
    "KernelEvent",
    "KernelEventKind",
    "KernelBooting",
    "KernelBooted",
    "KernelError",
    "KernelLifecycleError",
    "ReservedServiceError",
    "ContainerInaccessibleError",
    "ServiceNotFoundError",
]
