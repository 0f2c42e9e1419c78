"""Custom errors raised by named lookup tables."""

from __future__ import annotations

from ..errors import PlugfluxError


class RegistryError(PlugfluxError):
    """Base class for registry errors."""


class RegistryCollisionError(RegistryError):
    """Raised when a key is registered twice without ``replace=True``."""


class RegistryKeyError(RegistryError, KeyError):
    """Raised when a required key is not registered."""

    def __init__(self, registry: str, key: str) -> None:
        super().__init__(f"{key!r} is not registered in {registry}")
        self.registry = registry
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])
