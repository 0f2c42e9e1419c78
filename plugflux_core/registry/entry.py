"""Registry entry descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RegistryEntry:
    """Immutable record of one value stored in a :class:`Registry`."""

    key: str
    value: Any
    origin: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("key cannot be empty.")
