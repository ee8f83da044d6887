"""
Kernel errors.

Every error raised by the kernel itself derives from KernelError so callers
can catch the whole family. Errors raised by a locator while constructing a
service are never wrapped and reach the caller unchanged.
"""

from __future__ import annotations


class KernelError(Exception):
    """Base class for kernel errors."""


class KernelLifecycleError(KernelError):
    """Raised when configuration is changed outside the window the lifecycle allows."""


class ReservedServiceError(KernelError):
    """Raised when a reserved identifier is registered or used as an alias."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Cannot overwrite a reserved service definition: {identifier!r}"
        )


class ContainerInaccessibleError(KernelError):
    """Raised when the container is requested before the kernel has booted."""


class ServiceNotFoundError(KernelError, KeyError):
    """Raised by the default container for an unknown identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Service not found in container: {identifier}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])
