"""Pass-through actions that only publish an event."""

from __future__ import annotations

from typing import Any, Callable

from plugflux_core.events import EventBus


def make_action(events: EventBus, topic: str) -> Callable[..., None]:
    """Return an action that emits ``topic`` with the payload it receives.

    Anything beyond a straight hand-off (API calls, conditions) belongs in a
    hand-written action instead.
    """

    def action(payload: Any = None) -> None:
        events.emit(topic, payload)

    action.__name__ = topic.replace("/", "_")
    action.__qualname__ = action.__name__
    action.topic = topic  # type: ignore[attr-defined]
    return action
