"""
Debuggable capability.

Any service may implement ``debug_info()``; when the kernel runs in debug
mode the instrumented container keeps a reference to every resolved service
that does, and includes its current debug info in the kernel's export.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Debuggable(Protocol):
    """Protocol for services that expose internal state for debugging."""

    def debug_info(self) -> dict[str, Any]:
        """Return a (possibly nested) mapping describing the current state."""
        ...
