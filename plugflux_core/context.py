"""Explicit runtime context shared by every component of one composition."""

from __future__ import annotations

from dataclasses import dataclass, field

from .events import EventBus
from .store import DynamicStore


@dataclass
class RuntimeContext:
    """The event bus and dynamic store a composition runs against.

    Build one per application (or per test) and pass it to whatever needs it.
    """

    events: EventBus = field(default_factory=EventBus)
    store: DynamicStore = field(default_factory=DynamicStore)

    def reset(self) -> None:
        """Drop every handler and every store branch."""

        self.store.reset()
        self.events.clear_all()
