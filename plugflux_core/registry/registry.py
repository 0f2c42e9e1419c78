"""In-memory named lookup tables contributed by plugins."""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, TypeVar

from .entry import RegistryEntry
from .errors import RegistryCollisionError, RegistryKeyError

T = TypeVar("T")

_MISSING: Any = object()


class Registry(Generic[T]):
    """A lookup table keyed by string, preserving registration order."""

    def __init__(self, name: str, *, logger: logging.Logger | None = None) -> None:
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self._entries: dict[str, RegistryEntry] = {}

    def register(
        self,
        key: str,
        value: T,
        *,
        origin: str | None = None,
        replace: bool = False,
    ) -> None:
        """Store ``value`` under ``key``, raising on collisions unless ``replace``."""

        if key in self._entries:
            if not replace:
                raise RegistryCollisionError(f"{key} is already registered in {self.name}.")
            self.logger.debug("%s: replacing %s", self.name, key)
        self._entries[key] = RegistryEntry(key=key, value=value, origin=origin)

    def register_many(self, items: dict[str, T], *, origin: str | None = None) -> None:
        for key, value in items.items():
            self.register(key, value, origin=origin)

    def get(self, key: str, default: Any = None) -> T | Any:
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def require(self, key: str) -> T:
        entry = self._entries.get(key)
        if entry is None:
            raise RegistryKeyError(self.name, key)
        return entry.value

    def entry(self, key: str) -> RegistryEntry:
        entry = self._entries.get(key)
        if entry is None:
            raise RegistryKeyError(self.name, key)
        return entry

    def unregister(self, key: str, default: Any = _MISSING) -> T | Any:
        entry = self._entries.pop(key, None)
        if entry is None:
            if default is _MISSING:
                raise RegistryKeyError(self.name, key)
            return default
        return entry.value

    def get_all(self) -> tuple[T, ...]:
        return tuple(entry.value for entry in self._entries.values())

    def keys(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"<Registry {self.name} ({len(self)} entries)>"
