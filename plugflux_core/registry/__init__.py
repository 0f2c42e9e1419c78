"""Convenience exports for the registry helpers."""

from .entry import RegistryEntry
from .errors import RegistryCollisionError, RegistryError, RegistryKeyError
from .registry import Registry

__all__ = [
    "Registry",
    "RegistryEntry",
    "RegistryError",
    "RegistryCollisionError",
    "RegistryKeyError",
]
