"""
Application Kernel - owns the boot lifecycle and the service container.

The kernel is responsible for:
- Collecting container definitions and boot callbacks before boot
- Driving the boot sequence through its phases
- Handing the finished (optionally instrumented) container to callers
- Announcing lifecycle events to an optional event sink
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from bootkernel.debug.instrumented import InstrumentedLocator
from bootkernel.debug.profiler import Profiler
from bootkernel.kernel.definition import ServiceDefinition
from bootkernel.kernel.environment import Environment
from bootkernel.kernel.errors import (
    ContainerInaccessibleError,
    KernelLifecycleError,
    ReservedServiceError,
)
from bootkernel.kernel.interface import (
    DEBUG_ID,
    ENVIRONMENT_ID,
    EVENT_SINK_ID,
    EVENT_SINK_IDS,
    EVENT_SINK_INTERFACE_ID,
    KERNEL_ID,
    KERNEL_INTERFACE_ID,
    RESERVED_IDS,
    EventSink,
    Locator,
)
from bootkernel.kernel.logging import get_logger
from bootkernel.kernel.registrar import DefaultServiceRegistrar, ServiceRegistrar
from bootkernel.kernel.signal_hub import KernelBooted, KernelBooting, KernelEvent

if TYPE_CHECKING:
    from bootkernel.config.manager import ConfigManager

BootCallback = Callable[["Kernel"], Any]

PHASE_PRE_BOOT = "pre_boot"
PHASE_SERVICE_REGISTRATION = "service_registration"
PHASE_CONTAINER_INIT = "container_init"
PHASE_POST_BOOT = "post_boot"

_TRUTHY = {"1", "true", "yes", "on"}


class KernelState(Enum):
    """Lifecycle state of a kernel. Transitions only move forward."""

    IDLE = auto()      # Constructed, accepting configuration
    BOOTING = auto()   # Boot sequence in progress (or failed part-way)
    BOOTED = auto()    # Container built, terminal


class Kernel:
    """
    Bootstrap kernel that builds the service container exactly once.

    Configuration (definitions, callbacks) is collected while the kernel is
    idle; ``boot()`` registers everything through the ServiceRegistrar and
    freezes the result. In debug mode the boot phases are profiled and the
    container is wrapped so every resolution is recorded.

    Example:
        kernel = Kernel(Environment.DEVELOPMENT, debug=True)
        kernel.add_definition("clock", Clock, shared=True, aliases=["Clock"])
        kernel.boot()
        clock = kernel.get_container().get("Clock")
    """

    def __init__(
        self,
        environment: Environment | str,
        registrar: ServiceRegistrar | None = None,
        event_sink: EventSink | None = None,
        debug: bool = False,
    ) -> None:
        """
        Create a new kernel.

        Args:
            environment: Deployment environment
            registrar: Registrar used to build the container
                (default: DefaultServiceRegistrar)
            event_sink: Optional receiver of lifecycle events
            debug: Enable boot profiling and resolution instrumentation
        """
        self._environment = Environment.parse(environment)
        self._registrar = registrar if registrar is not None else DefaultServiceRegistrar()
        self._event_sink = event_sink
        self._debug = debug

        self._state = KernelState.IDLE
        self._definitions: dict[str, ServiceDefinition] = {}
        self._booting_callbacks: list[BootCallback] = []
        self._booted_callbacks: list[BootCallback] = []

        self._container: Locator | None = None
        self._profiler: Profiler | None = None
        self._start_time: float | None = None

        self._lock = threading.RLock()
        self._logger = get_logger(__name__)

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        registrar: ServiceRegistrar | None = None,
        event_sink: EventSink | None = None,
    ) -> Kernel:
        """Create a kernel from the ``kernel`` section of a configuration."""
        debug = config.get("kernel.debug", False)
        if isinstance(debug, str):
            debug = debug.strip().lower() in _TRUTHY

        return cls(
            config.get("kernel.environment", Environment.PRODUCTION.value),
            registrar=registrar,
            event_sink=event_sink,
            debug=bool(debug),
        )

    # === Boot ===

    def boot(self) -> None:
        """
        Run the boot sequence.

        Calling boot() on a booted kernel does nothing. If a callback or
        factory fails, the error propagates and the kernel stays in the
        BOOTING state for good.

        Raises:
            KernelLifecycleError: if called from inside the boot sequence or
                after a failed boot
        """
        with self._lock:
            if self._state is KernelState.BOOTED:
                return

            if self._state is KernelState.BOOTING:
                raise KernelLifecycleError(
                    "Kernel is already booting or a previous boot failed, "
                    "create a new kernel to boot again"
                )

            self._state = KernelState.BOOTING

            if self._debug:
                self._profiler = Profiler()
                self._profiler.start()
                self._start_time = time.time()

            self._logger.info(
                "Booting kernel (environment=%s, debug=%s)...",
                self._environment.value,
                self._debug,
            )

            try:
                self._dispatch(KernelBooting(self))

                with self._phase(PHASE_PRE_BOOT):
                    for callback in self._booting_callbacks:
                        callback(self)

                with self._phase(PHASE_SERVICE_REGISTRATION):
                    self._register_services()

                with self._phase(PHASE_CONTAINER_INIT):
                    self._container = self._build_container()

                self._state = KernelState.BOOTED

                self._dispatch(KernelBooted(self))

                with self._phase(PHASE_POST_BOOT):
                    for callback in self._booted_callbacks:
                        callback(self)

            except Exception as e:
                self._logger.exception(f"Failed to boot kernel: {e}")
                raise

            if self._profiler is not None:
                self._profiler.stop()
                self._logger.info(
                    "Kernel booted in %.3fms (%d definitions)",
                    (self._profiler.overall_duration() or 0.0) * 1000,
                    len(self._definitions),
                )
            else:
                self._logger.info(
                    "Kernel booted (%d definitions)", len(self._definitions)
                )

    @contextmanager
    def _phase(self, name: str) -> Iterator[None]:
        """Time a boot phase when profiling; an aborted phase keeps no end time."""
        self._logger.debug("Boot phase %s started", name)
        if self._profiler is not None:
            self._profiler.start_phase(name)

        yield

        if self._profiler is not None:
            self._profiler.stop_phase(name)
        self._logger.debug("Boot phase %s finished", name)

    def _register_services(self) -> None:
        """Register the built-in services, then the user definitions."""
        register = self._registrar.register

        register(KERNEL_ID, lambda: self, True, aliases=[KERNEL_INTERFACE_ID])

        if self._event_sink is not None:
            sink = self._event_sink
            register(EVENT_SINK_ID, lambda: sink, True, aliases=[EVENT_SINK_INTERFACE_ID])

        debug = self._debug
        environment = self._environment.value
        register(DEBUG_ID, lambda: debug, True, aliases=[])
        register(ENVIRONMENT_ID, lambda: environment, True, aliases=[])

        for definition in self._definitions.values():
            register(
                definition.id,
                definition.factory,
                definition.shared,
                aliases=list(definition.aliases),
            )

    def _build_container(self) -> Locator:
        container = self._registrar.get_container()

        if self._debug:
            container = InstrumentedLocator(
                container,
                dict(self._definitions),
                self._builtin_aliases(),
            )
            self._logger.debug("Container wrapped for resolution profiling")

        return container

    def _builtin_aliases(self) -> dict[str, str]:
        aliases = {KERNEL_INTERFACE_ID: KERNEL_ID}
        if self._event_sink is not None:
            aliases[EVENT_SINK_INTERFACE_ID] = EVENT_SINK_ID
        return aliases

    def _dispatch(self, event: KernelEvent) -> None:
        if self._event_sink is not None:
            self._event_sink.notify(event)

    # === Configuration ===

    def add_definition(
        self,
        service_id: str,
        factory: Callable[..., Any],
        shared: bool = False,
        aliases: Iterable[str] = (),
    ) -> Kernel:
        """
        Add a container definition.

        A definition added under an existing id replaces the previous one,
        aliases included.

        Raises:
            KernelLifecycleError: if the kernel has already been booted
            ReservedServiceError: if the id or an alias is reserved
        """
        with self._lock:
            if self._state is KernelState.BOOTED:
                raise KernelLifecycleError(
                    "Kernel has already been booted, cannot add new container definitions"
                )

            if isinstance(aliases, str):
                aliases = (aliases,)
            aliases = tuple(aliases)

            reserved = self._reserved_ids()
            for name in (service_id, *aliases):
                if name in reserved:
                    self._logger.warning(
                        "Rejected definition %s: %s is reserved", service_id, name
                    )
                    raise ReservedServiceError(name)

            if service_id in self._definitions:
                self._logger.debug("Overwriting definition %s", service_id)

            self._definitions[service_id] = ServiceDefinition(
                id=service_id,
                factory=factory,
                shared=shared,
                aliases=aliases,
            )

        return self

    def on_booting(self, callback: BootCallback) -> Kernel:
        """
        Register a callback run at the start of boot, before any service is
        registered. The callback receives the kernel and may add definitions.

        Raises:
            KernelLifecycleError: if booting has already started
        """
        with self._lock:
            if self._state is not KernelState.IDLE:
                raise KernelLifecycleError(
                    "Kernel has already started booting, cannot add new booting callbacks"
                )
            self._booting_callbacks.append(callback)

        return self

    def on_booted(self, callback: BootCallback) -> Kernel:
        """
        Register a callback run once the kernel is booted and the container
        is available.

        Raises:
            KernelLifecycleError: if the kernel has already been booted
        """
        with self._lock:
            if self._state is KernelState.BOOTED:
                raise KernelLifecycleError(
                    "Kernel has already been booted, cannot add new booted callbacks"
                )
            self._booted_callbacks.append(callback)

        return self

    def _reserved_ids(self) -> frozenset[str]:
        if self._event_sink is not None:
            return RESERVED_IDS | EVENT_SINK_IDS
        return RESERVED_IDS

    # === Accessors ===

    def get_container(self) -> Locator:
        """
        Get the container built during boot.

        Raises:
            ContainerInaccessibleError: if the kernel has not been booted
        """
        if self._state is not KernelState.BOOTED or self._container is None:
            raise ContainerInaccessibleError(
                "Container is inaccessible, kernel has not been booted"
            )
        return self._container

    def get_start_time(self) -> float | None:
        """Wall-clock time boot started at; only recorded in debug mode."""
        if not self._debug:
            return None
        return self._start_time

    def get_debug_info(self) -> dict[str, Any]:
        """
        Boot profile and resolution data, evaluated now.

        Empty unless the kernel runs in debug mode.
        """
        if not self._debug:
            return {}

        info: dict[str, Any] = {}
        if self._profiler is not None:
            info["bootProfile"] = self._profiler.debug_info()
        if isinstance(self._container, InstrumentedLocator):
            info.update(self._container.debug_info())
        return info

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def is_debug(self) -> bool:
        return self._debug

    @property
    def state(self) -> KernelState:
        return self._state

    @property
    def is_booting(self) -> bool:
        return self._state is KernelState.BOOTING

    @property
    def is_booted(self) -> bool:
        return self._state is KernelState.BOOTED

    @property
    def profiler(self) -> Profiler | None:
        """Boot profiler, present once a debug-mode boot has started."""
        return self._profiler

    @property
    def definitions(self) -> dict[str, ServiceDefinition]:
        """Copy of the user definitions added so far."""
        return dict(self._definitions)
