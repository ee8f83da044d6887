"""
Service definitions - the recipe the kernel hands to its registrar.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ServiceDefinition:
    """
    How to build one service.

    ``factory`` takes either no argument or the container resolving it.
    ``shared`` services are constructed once and cached by the container.
    """

    id: str
    factory: Callable[..., Any]
    shared: bool = False
    aliases: tuple[str, ...] = ()
