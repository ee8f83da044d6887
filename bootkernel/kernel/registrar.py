"""
Service registrar - the seam between the kernel and a concrete container.

The kernel never writes into a container directly; it hands every
definition to a ServiceRegistrar and asks it for the finished container
once registration is over. Swapping the registrar swaps the container.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from bootkernel.kernel.container import ServiceContainer
from bootkernel.kernel.interface import Locator


@runtime_checkable
class ServiceRegistrar(Protocol):
    """Registers definitions into a container and hands the container out."""

    def register(
        self,
        service_id: str,
        factory: Callable[..., Any],
        shared: bool = False,
        aliases: Iterable[str] = (),
    ) -> None:
        """Register a service with the container."""
        ...

    def get_container(self) -> Locator:
        """Get the underlying container instance."""
        ...


class DefaultServiceRegistrar:
    """Registrar backed by a ServiceContainer."""

    def __init__(self, container: ServiceContainer | None = None) -> None:
        self._container = container if container is not None else ServiceContainer()

    def register(
        self,
        service_id: str,
        factory: Callable[..., Any],
        shared: bool = False,
        aliases: Iterable[str] = (),
    ) -> None:
        self._container.add(service_id, factory, shared)

        for alias in aliases:
            self._container.add_alias(service_id, alias)

    def get_container(self) -> ServiceContainer:
        return self._container
