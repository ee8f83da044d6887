"""
Kernel environment - the deployment stage the kernel runs in.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Deployment environment of a kernel."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    TESTING = "testing"

    @classmethod
    def parse(cls, value: Environment | str) -> Environment:
        """
        Coerce a string (case-insensitive) into an Environment.

        Raises:
            ValueError: if the value names no known environment
        """
        if isinstance(value, Environment):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(env.value for env in cls)
            raise ValueError(
                f"Unknown environment {value!r}, expected one of: {choices}"
            ) from None
