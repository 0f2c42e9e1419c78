"""Synchronous topic-keyed event bus shared by plugins."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict

from .errors import EventPayloadError

__all__ = ["EventBus", "EventHandler", "Subscription"]

EventHandler = Callable[[Any], None]


@dataclass(eq=False)
class _EventSubscription:
    priority: int
    order: int
    handler: EventHandler
    active: bool = field(default=True)


class Subscription:
    """Owns exactly one handler registration."""

    def __init__(self, bus: "EventBus", topic: str, entry: _EventSubscription) -> None:
        self._bus = bus
        self._entry = entry
        self.topic = topic

    @property
    def active(self) -> bool:
        return self._entry.active

    def unsubscribe(self) -> None:
        """Remove the handler; calling this more than once is harmless."""

        if not self._entry.active:
            return
        self._entry.active = False
        self._bus._discard(self.topic, self._entry)

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"<Subscription {self.topic!r} {state}>"


class EventBus:
    """Synchronous event bus with deterministic delivery.

    Handlers run in descending ``priority``; equal priorities run in the order
    they subscribed. Every ``emit`` works on a snapshot taken when it starts:
    handlers subscribed during the dispatch wait for the next ``emit``, while
    handlers unsubscribed during the dispatch are skipped if they have not run
    yet. Handler exceptions propagate to the caller of ``emit``.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._handlers: DefaultDict[str, list[_EventSubscription]] = defaultdict(list)
        self._sequence: DefaultDict[str, int] = defaultdict(int)
        self._payload_types: dict[str, type] = {}
        self.logger = logger or logging.getLogger(__name__)

    def declare(self, topic: str, payload_type: type) -> None:
        """Require payloads emitted on ``topic`` to be instances of ``payload_type``."""

        self._check_topic(topic)
        self._payload_types[topic] = payload_type

    def on(self, topic: str, handler: EventHandler, priority: int = 0) -> Subscription:
        """Register ``handler`` for ``topic`` and return its subscription."""

        self._check_topic(topic)
        if not callable(handler):
            raise TypeError("handler must be callable")
        order = self._sequence[topic]
        self._sequence[topic] = order + 1
        entry = _EventSubscription(priority=priority, order=order, handler=handler)
        self._handlers[topic].append(entry)
        return Subscription(self, topic, entry)

    def once(self, topic: str, handler: EventHandler, priority: int = 0) -> Subscription:
        """Register ``handler`` for a single delivery on ``topic``."""

        subscription: Subscription | None = None

        def wrapper(payload: Any) -> None:
            assert subscription is not None
            subscription.unsubscribe()
            handler(payload)

        subscription = self.on(topic, wrapper, priority=priority)
        return subscription

    def emit(self, topic: str, payload: Any = None) -> None:
        expected = self._payload_types.get(topic)
        if expected is not None and not isinstance(payload, expected):
            raise EventPayloadError(topic, expected, payload)

        entries = self._handlers.get(topic)
        if not entries:
            self.logger.debug("no handlers for %s", topic)
            return
        snapshot = sorted(entries, key=lambda item: (-item.priority, item.order))
        for entry in snapshot:
            if entry.active:
                entry.handler(payload)

    def clear(self, topic: str) -> None:
        """Drop every handler registered for ``topic``."""

        for entry in self._handlers.pop(topic, ()):
            entry.active = False

    def clear_all(self) -> None:
        for topic in list(self._handlers):
            self.clear(topic)

    def has_handlers(self, topic: str) -> bool:
        return bool(self._handlers.get(topic))

    def topics(self) -> tuple[str, ...]:
        return tuple(topic for topic, entries in self._handlers.items() if entries)

    def _discard(self, topic: str, entry: _EventSubscription) -> None:
        entries = self._handlers.get(topic)
        if entries is None:
            return
        try:
            entries.remove(entry)
        except ValueError:
            return
        if not entries:
            del self._handlers[topic]

    @staticmethod
    def _check_topic(topic: str) -> None:
        if not isinstance(topic, str) or not topic:
            raise ValueError("topic must be a non-empty string")
