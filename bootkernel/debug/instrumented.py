"""
Instrumented locator - wraps a container to profile service resolution.

Lookups return exactly what the wrapped container returns (and raise
exactly what it raises); the wrapper only measures them.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bootkernel.debug.debuggable import Debuggable
from bootkernel.debug.resolution import ResolutionLedger

if TYPE_CHECKING:
    from bootkernel.kernel.definition import ServiceDefinition
    from bootkernel.kernel.interface import Locator

logger = logging.getLogger(__name__)


class InstrumentedLocator:
    """
    Debug decorator around a locator.

    Every ``get`` is timed and fed to a ResolutionLedger. Resolved services
    that are Debuggable are kept by reference, so the exported debug info
    reflects their state at export time rather than at resolution time.
    """

    def __init__(
        self,
        locator: Locator,
        definitions: Mapping[str, ServiceDefinition],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._locator = locator
        self._ledger = ResolutionLedger(definitions, aliases)
        self._debuggable: dict[str, Debuggable] = {}

    @property
    def inner(self) -> Locator:
        """The wrapped locator."""
        return self._locator

    @property
    def ledger(self) -> ResolutionLedger:
        return self._ledger

    def has(self, service_id: str) -> bool:
        return self._locator.has(service_id)

    def get(self, service_id: str) -> Any:
        start = time.perf_counter()

        resolved = self._locator.get(service_id)

        elapsed = time.perf_counter() - start

        record = self._ledger.resolve(service_id, elapsed)
        logger.debug(
            "Resolved %s in %.6fs (count=%d)",
            service_id,
            elapsed,
            record.resolution_count,
        )

        # classes satisfy the protocol through their unbound debug_info
        if not isinstance(resolved, type) and isinstance(resolved, Debuggable):
            self._debuggable[service_id] = resolved

        return resolved

    def debug_info(self) -> dict[str, Any]:
        services = {
            service_id: debuggable.debug_info()
            for service_id, debuggable in self._debuggable.items()
        }

        return {
            "resolutionLedger": self._ledger.debug_info(),
            "servicesDebugInfo": services,
        }
