"""
Kernel interface - the capabilities every kernel exposes.

Services that need the kernel should depend on KernelInterface rather than
on the concrete Kernel; once booted the kernel is registered in its own
container under both KERNEL_ID and KERNEL_INTERFACE_ID.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from bootkernel.kernel.environment import Environment


def service_token(service_type: type) -> str:
    """Identifier used when a type is registered as a service alias."""
    return f"{service_type.__module__}.{service_type.__qualname__}"


@runtime_checkable
class Locator(Protocol):
    """Read side of a service container."""

    def has(self, service_id: str) -> bool:
        """Check whether an identifier (or alias) is registered."""
        ...

    def get(self, service_id: str) -> Any:
        """Return the service for an identifier (or alias)."""
        ...


@runtime_checkable
class EventSink(Protocol):
    """Receives kernel lifecycle events."""

    def notify(self, event: Any) -> None:
        """Deliver an event."""
        ...


@runtime_checkable
class KernelInterface(Protocol):
    """Protocol implemented by the application kernel."""

    @property
    def environment(self) -> Environment:
        """Environment the kernel runs in."""
        ...

    @property
    def is_debug(self) -> bool:
        """Whether debug instrumentation is enabled."""
        ...

    @property
    def is_booting(self) -> bool:
        """Whether the boot sequence is in progress."""
        ...

    @property
    def is_booted(self) -> bool:
        """Whether the boot sequence has completed."""
        ...

    def boot(self) -> None:
        """Run the boot sequence."""
        ...

    def on_booting(self, callback: Callable[[Any], None]) -> Any:
        """Register a callback to run at the start of boot."""
        ...

    def add_definition(
        self,
        service_id: str,
        factory: Callable[..., Any],
        shared: bool = False,
        aliases: Iterable[str] = (),
    ) -> Any:
        """Add a container definition."""
        ...

    def get_container(self) -> Locator:
        """Get the container built during boot."""
        ...

    def get_start_time(self) -> float | None:
        """Get the boot start time (debug mode only)."""
        ...


KERNEL_ID = "kernel"
KERNEL_INTERFACE_ID = service_token(KernelInterface)
DEBUG_ID = "kernel.debug"
ENVIRONMENT_ID = "kernel.environment"
EVENT_SINK_ID = "event.dispatcher"
EVENT_SINK_INTERFACE_ID = service_token(EventSink)

# Always reserved; the event sink ids are reserved only when a sink is configured
RESERVED_IDS: frozenset[str] = frozenset(
    {KERNEL_ID, KERNEL_INTERFACE_ID, DEBUG_ID, ENVIRONMENT_ID}
)
EVENT_SINK_IDS: frozenset[str] = frozenset({EVENT_SINK_ID, EVENT_SINK_INTERFACE_ID})
