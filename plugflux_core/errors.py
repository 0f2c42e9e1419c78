"""Error types raised by the plugflux core runtime."""

from __future__ import annotations

from typing import Sequence


class PlugfluxError(Exception):
    """Base class for composition runtime failures."""


class ConfigurationError(PlugfluxError):
    """Raised for malformed slice names, misuse of the store or composer, and bad config files."""


class DependencyError(PlugfluxError):
    """Raised in strict mode when a plugin requires a plugin that is not registered."""

    def __init__(self, plugin: str, dependency: str) -> None:
        super().__init__(
            f"plugin {plugin!r} requires {dependency!r} but it is not registered"
        )
        self.plugin = plugin
        self.dependency = dependency


class CycleError(PlugfluxError):
    """Raised when plugin dependencies form a cycle."""

    def __init__(self, plugin: str, path: Sequence[str]) -> None:
        chain = " -> ".join((*path, plugin))
        super().__init__(f"circular dependency detected at {plugin!r}: {chain}")
        self.plugin = plugin
        self.path = tuple(path)


class DispatchError(PlugfluxError):
    """Raised when the store is re-entered while an update function is running."""


class EventPayloadError(PlugfluxError, TypeError):
    """Raised when a declared topic is emitted with a payload of the wrong type."""

    def __init__(self, topic: str, expected: type, payload: object) -> None:
        super().__init__(
            f"topic {topic!r} expects {expected.__name__}, got {type(payload).__name__}"
        )
        self.topic = topic
        self.expected = expected
