"""
bootkernel - application bootstrap kernel with debug instrumentation.
"""

from bootkernel.bootstrap import create_kernel, load_config
from bootkernel.debug import (
    Debuggable,
    InstrumentedLocator,
    Profiler,
    ResolutionLedger,
    ResolutionRecord,
)
from bootkernel.kernel import (
    ContainerInaccessibleError,
    DefaultServiceRegistrar,
    Environment,
    EventSink,
    Kernel,
    KernelBooted,
    KernelBooting,
    KernelError,
    KernelEvent,
    KernelEventKind,
    KernelInterface,
    KernelLifecycleError,
    KernelState,
    Locator,
    ReservedServiceError,
    ServiceContainer,
    ServiceDefinition,
    ServiceNotFoundError,
    ServiceRegistrar,
    SignalHub,
)

__version__ = "1.0.0"

__all__ = [
    "create_kernel",
    "load_config",
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
    "Debuggable",
    "InstrumentedLocator",
    "Profiler",
    "ResolutionLedger",
    "ResolutionRecord",
    "KernelError",
    "KernelLifecycleError",
    "ReservedServiceError",
    "ContainerInaccessibleError",
    "ServiceNotFoundError",
]
