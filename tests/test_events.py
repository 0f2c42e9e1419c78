"""Unit tests for the plugflux EventBus."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from plugflux_core.errors import EventPayloadError
from plugflux_core.events import EventBus


def test_emit_reaches_every_handler_in_subscription_order() -> None:
    bus = EventBus()
    seen: list[str] = []

    bus.on("chat/threads/selected", lambda payload: seen.append(f"one:{payload}"))
    bus.on("chat/threads/selected", lambda payload: seen.append(f"two:{payload}"))
    bus.on("chat/threads/other", lambda payload: seen.append("other"))
    bus.emit("chat/threads/selected", "t1")

    assert seen == ["one:t1", "two:t1"]


def test_priority_runs_first_and_ties_keep_order() -> None:
    bus = EventBus()
    seen: list[str] = []

    bus.on("ready", lambda _: seen.append("one"))
    bus.on("ready", lambda _: seen.append("two"))
    bus.on("ready", lambda _: seen.append("high"), priority=5)
    bus.on("ready", lambda _: seen.append("low"), priority=-1)
    bus.emit("ready")

    assert seen == ["high", "one", "two", "low"]


def test_emit_without_payload_passes_none() -> None:
    bus = EventBus()
    received: list[object] = []
    bus.on("app/started", received.append)

    bus.emit("app/started")
    assert received == [None]


def test_unsubscribed_handler_is_not_invoked() -> None:
    bus = EventBus()
    calls: list[int] = []
    subscription = bus.on("x", lambda payload: calls.append(payload))

    bus.emit("x", 1)
    subscription.unsubscribe()
    subscription.unsubscribe()
    bus.emit("x", 2)

    assert calls == [1]
    assert not subscription.active
    assert not bus.has_handlers("x")


def test_same_handler_twice_gives_independent_subscriptions() -> None:
    bus = EventBus()
    calls: list[str] = []

    def handler(payload: str) -> None:
        calls.append(payload)

    first = bus.on("x", handler)
    bus.on("x", handler)
    bus.emit("x", "a")
    first.unsubscribe()
    bus.emit("x", "b")

    assert calls == ["a", "a", "b"]


def test_once_fires_a_single_time() -> None:
    bus = EventBus()
    calls: list[str] = []
    subscription = bus.once("x", calls.append)

    bus.emit("x", "first")
    bus.emit("x", "second")
    bus.emit("x", "third")

    assert calls == ["first"]
    assert not subscription.active


def test_once_can_be_cancelled_before_delivery() -> None:
    bus = EventBus()
    calls: list[str] = []
    bus.once("x", calls.append).unsubscribe()

    bus.emit("x", "ignored")
    assert calls == []


def test_handler_added_during_dispatch_waits_for_next_emit() -> None:
    bus = EventBus()
    calls: list[str] = []

    def late(payload: str) -> None:
        calls.append(f"late:{payload}")

    def subscriber(payload: str) -> None:
        calls.append(f"early:{payload}")
        bus.on("x", late)

    bus.once("x", subscriber)
    bus.emit("x", "1")
    bus.emit("x", "2")

    assert calls == ["early:1", "late:2"]


def test_handler_removed_during_dispatch_is_skipped() -> None:
    bus = EventBus()
    calls: list[str] = []
    subscriptions = {}

    def first(_: object) -> None:
        calls.append("first")
        subscriptions["second"].unsubscribe()

    bus.on("x", first)
    subscriptions["second"] = bus.on("x", lambda _: calls.append("second"))
    bus.emit("x")

    assert calls == ["first"]


def test_clear_and_clear_all() -> None:
    bus = EventBus()
    calls: list[str] = []
    kept = bus.on("a", lambda _: calls.append("a"))
    dropped = bus.on("b", lambda _: calls.append("b"))

    bus.clear("b")
    bus.emit("a")
    bus.emit("b")
    assert calls == ["a"]
    assert not dropped.active
    assert bus.topics() == ("a",)

    bus.clear_all()
    bus.emit("a")
    assert calls == ["a"]
    assert not kept.active
    assert bus.topics() == ()


def test_handler_errors_propagate_to_emitter() -> None:
    bus = EventBus()
    calls: list[str] = []

    def broken(_: object) -> None:
        raise RuntimeError("boom")

    bus.on("x", broken)
    bus.on("x", lambda _: calls.append("after"))

    with pytest.raises(RuntimeError):
        bus.emit("x")
    assert calls == []


@dataclass(frozen=True)
class _Selected:
    thread_id: str


def test_declared_topic_validates_payload_type() -> None:
    bus = EventBus()
    bus.declare("chat/threads/selected", _Selected)
    received: list[_Selected] = []
    bus.on("chat/threads/selected", received.append)

    bus.emit("chat/threads/selected", _Selected("t1"))
    with pytest.raises(EventPayloadError) as excinfo:
        bus.emit("chat/threads/selected", {"thread_id": "t2"})

    assert received == [_Selected("t1")]
    assert excinfo.value.topic == "chat/threads/selected"


def test_invalid_topic_and_handler_are_rejected() -> None:
    bus = EventBus()
    with pytest.raises(ValueError):
        bus.on("", lambda _: None)
    with pytest.raises(TypeError):
        bus.on("x", "not callable")  # type: ignore[arg-type]
