"""
Service resolution accounting.

ResolutionRecord counts how often one service was resolved and how long
those resolutions took. ResolutionLedger owns the records for a whole boot
session and remembers which defined services were never resolved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bootkernel.kernel.definition import ServiceDefinition


class ResolutionRecord:
    """Resolution counters for a single canonical service identifier."""

    def __init__(self, service_id: str) -> None:
        self._id = service_id
        self._resolution_count = 0
        self._resolution_time = 0.0

    @property
    def id(self) -> str:
        return self._id

    @property
    def resolution_count(self) -> int:
        return self._resolution_count

    @property
    def resolution_time(self) -> float:
        """Cumulative time spent resolving the service, in seconds."""
        return self._resolution_time

    def increment_resolution_count(self) -> ResolutionRecord:
        self._resolution_count += 1
        return self

    def add_resolution_time(self, duration: float) -> ResolutionRecord:
        self._resolution_time += duration
        return self

    def debug_info(self) -> dict[str, dict[str, Any]]:
        return {
            self._id: {
                "resolutionCount": self._resolution_count,
                "totalResolutionTime": self._resolution_time,
            }
        }

    def __repr__(self) -> str:
        return (
            f"ResolutionRecord(id={self._id!r}, "
            f"resolution_count={self._resolution_count}, "
            f"resolution_time={self._resolution_time!r})"
        )


class ResolutionLedger:
    """
    Tracks which services were resolved during a session.

    Every defined identifier starts out unresolved and moves to the resolved
    side exactly once, on its first resolution through any of its names.
    Identifiers that were not part of the definition table (the kernel's
    built-ins, say) are still recorded when resolved.
    """

    def __init__(
        self,
        definitions: Mapping[str, ServiceDefinition],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        """
        Args:
            definitions: id -> definition; every id starts unresolved
            aliases: extra alias -> id pairs for services that are not
                tracked as unresolved
        """
        self._resolved: dict[str, ResolutionRecord] = {}
        # dict used as an ordered set
        self._unresolved: dict[str, None] = {}
        self._aliases: dict[str, str] = dict(aliases or {})

        for service_id, definition in definitions.items():
            self._unresolved[service_id] = None

            for alias in definition.aliases:
                self._aliases[alias] = service_id

    def canonical_id(self, service_id: str) -> str:
        """Map an alias to its canonical identifier."""
        return self._aliases.get(service_id, service_id)

    def resolve(self, service_id: str, resolution_time: float) -> ResolutionRecord:
        """Record one resolution of a service requested by id or alias."""
        service_id = self.canonical_id(service_id)

        record = self._resolved.get(service_id)
        if record is None:
            record = self._resolved[service_id] = ResolutionRecord(service_id)
            self._unresolved.pop(service_id, None)

        return record.increment_resolution_count().add_resolution_time(resolution_time)

    def get(self, service_id: str) -> ResolutionRecord | None:
        """Record for a service (by id or alias), if it was ever resolved."""
        return self._resolved.get(self.canonical_id(service_id))

    def resolved_services(self) -> dict[str, dict[str, Any]]:
        services: dict[str, dict[str, Any]] = {}
        for record in self._resolved.values():
            services.update(record.debug_info())
        return services

    def unresolved_services(self) -> list[str]:
        """Defined identifiers never resolved, in definition order."""
        return list(self._unresolved)

    def debug_info(self) -> dict[str, Any]:
        return {
            "resolved": self.resolved_services(),
            "unresolved": self.unresolved_services(),
        }
