"""Tests for slices, the combinator and the dynamic store."""

from __future__ import annotations

import logging

import pytest

from plugflux_core import RuntimeContext
from plugflux_core.errors import ConfigurationError, DispatchError
from plugflux_core.events import EventBus
from plugflux_core.store import (
    Action,
    DynamicStore,
    Slice,
    combine_updates,
    create_slice,
)


def _counter(name: str, start: int = 0) -> Slice:
    return create_slice(
        name,
        start,
        {
            "increment": lambda state, action: state + (action.payload or 1),
            "reset": lambda state, action: 0,
        },
    )


def test_create_slice_builds_action_creators() -> None:
    counter = _counter("chat/count")
    action = counter.actions["increment"](3)

    assert action == Action("chat/count/increment", 3)
    assert counter.actions["increment"].match(action)
    assert counter.reduce(None, action) == 3
    assert counter.reduce(5, Action("unrelated")) == 5


def test_combinator_initialises_and_keeps_untouched_state() -> None:
    combined = combine_updates({"a": _counter("a", 1), "b": _counter("b", 2)})
    state = combined(None, Action("@@init"))
    assert state == {"a": 1, "b": 2}

    assert combined(state, Action("nothing")) is state
    assert combined(state, Action("a/increment", 4)) == {"a": 5, "b": 2}
    assert combined({"a": 1, "b": 2, "gone": 9}, Action("nothing")) == {"a": 1, "b": 2}


def test_create_routes_actions_to_every_branch() -> None:
    manager = DynamicStore()
    counter = _counter("chat/count")
    store = manager.create([counter, _counter("header", 10)])

    store.dispatch(counter.actions["increment"](2))

    assert store.get_state() == {"chat/count": 2, "header": 10}
    assert manager.registered_slices() == ("chat/count", "header")


def test_get_lazily_creates_empty_store() -> None:
    manager = DynamicStore()
    store = manager.get()

    assert store.get_state() == {}
    assert manager.get() is store


@pytest.mark.parametrize("name", ["chat/threads", "header"])
def test_register_slice_accepts_valid_names(name: str) -> None:
    manager = DynamicStore()
    manager.create()
    manager.register_slice(_counter(name))

    assert manager.has_slice(name)


@pytest.mark.parametrize("name", ["chat/threads/extra", "chat//", "/threads", "chat/"])
def test_register_slice_rejects_malformed_names(name: str) -> None:
    manager = DynamicStore()
    manager.create()

    with pytest.raises(ConfigurationError):
        manager.register_slice(_counter(name))
    assert not manager.has_slice(name)


def test_create_rejects_malformed_names() -> None:
    manager = DynamicStore()

    with pytest.raises(ConfigurationError):
        manager.create([_counter("a/one"), _counter("a/b/c")])
    assert manager.registered_slices() == ()


def test_register_slice_requires_store() -> None:
    with pytest.raises(ConfigurationError):
        DynamicStore().register_slice(_counter("chat/threads"))


def test_register_keeps_existing_values_and_initialises_new_branch() -> None:
    manager = DynamicStore()
    counter = _counter("chat/count")
    store = manager.create([counter])
    store.dispatch(counter.actions["increment"](7))

    manager.register_slice(_counter("chat/other", 3))

    assert store.get_state() == {"chat/count": 7, "chat/other": 3}


def test_duplicate_registration_is_a_warned_no_op(caplog: pytest.LogCaptureFixture) -> None:
    manager = DynamicStore()
    store = manager.create()
    original = _counter("chat/count")
    replacement = create_slice("chat/count", 100, {"increment": lambda state, action: -1})
    manager.register_slice(original)

    with caplog.at_level(logging.WARNING):
        manager.register_slice(replacement)

    assert "already registered" in caplog.text
    assert manager.registered_slices() == ("chat/count",)
    store.dispatch(Action("chat/count/increment", 2))
    assert store.get_state() == {"chat/count": 2}


def test_init_effects_wire_events_and_cleanup_on_unregister() -> None:
    bus = EventBus()
    manager = DynamicStore()
    store = manager.create()
    counter = _counter("chat/count")

    def init_effects(dispatch):
        subscription = bus.on("chat/count/bumped", lambda amount: dispatch(counter.actions["increment"](amount)))
        return subscription.unsubscribe

    manager.register_slice(counter, init_effects)
    bus.emit("chat/count/bumped", 4)
    assert store.get_state() == {"chat/count": 4}

    manager.unregister_slice("chat/count")
    assert store.get_state() == {}
    assert not bus.has_handlers("chat/count/bumped")


def test_unregister_unknown_slice_warns(caplog: pytest.LogCaptureFixture) -> None:
    manager = DynamicStore()
    manager.create()

    with caplog.at_level(logging.WARNING):
        manager.unregister_slice("chat/missing")

    assert "not registered" in caplog.text


def test_unregister_keeps_other_branches() -> None:
    manager = DynamicStore()
    first, second = _counter("a/one"), _counter("a/two")
    store = manager.create([first, second])
    store.dispatch(second.actions["increment"](5))

    manager.unregister_slice("a/one")

    assert store.get_state() == {"a/two": 5}
    assert manager.registered_slices() == ("a/two",)


def test_reset_runs_cleanups_and_forgets_store() -> None:
    manager = DynamicStore()
    first_store = manager.create()
    cleaned: list[str] = []
    manager.register_slice(_counter("a/one"), lambda dispatch: lambda: cleaned.append("a/one"))

    manager.reset()

    assert cleaned == ["a/one"]
    assert manager.registered_slices() == ()
    assert manager.get() is not first_store
    with pytest.raises(ConfigurationError):
        DynamicStore().register_slice(_counter("a/one"))


def test_create_skips_duplicate_slices(caplog: pytest.LogCaptureFixture) -> None:
    manager = DynamicStore()
    with caplog.at_level(logging.WARNING):
        store = manager.create([_counter("a/one", 1), _counter("a/one", 2)])

    assert store.get_state() == {"a/one": 1}
    assert "already registered" in caplog.text


def test_dispatch_from_update_function_is_rejected() -> None:
    manager = DynamicStore()
    store = manager.create()

    def reentrant(state, action):
        if action.type == "loop/go":
            store.dispatch(Action("loop/again"))
        return state

    manager.register_slice(Slice(name="loop/state", update=reentrant, initial_state=0))
    with pytest.raises(DispatchError):
        store.dispatch(Action("loop/go"))
    assert not store.dispatching


def test_slice_changes_from_update_function_are_rejected() -> None:
    manager = DynamicStore()
    store = manager.create([_counter("a/victim")])

    def mutating(state, action):
        if action.type == "loop/add":
            manager.register_slice(_counter("a/late"))
        if action.type == "loop/remove":
            manager.unregister_slice("a/victim")
        return state

    manager.register_slice(Slice(name="loop/state", update=mutating, initial_state=0))

    with pytest.raises(DispatchError):
        store.dispatch(Action("loop/add"))
    with pytest.raises(DispatchError):
        store.dispatch(Action("loop/remove"))
    assert manager.registered_slices() == ("a/victim", "loop/state")


def test_none_is_a_valid_branch_state() -> None:
    manager = DynamicStore()
    selection = create_slice(
        "a/selection",
        "first",
        {
            "clear": lambda state, action: None,
            "touch": lambda state, action: state,
        },
    )
    store = manager.create([selection])

    store.dispatch(selection.actions["clear"]())
    store.dispatch(selection.actions["touch"]())

    assert store.get_state() == {"a/selection": None}


def test_listeners_run_after_update_and_may_dispatch() -> None:
    manager = DynamicStore()
    counter = _counter("a/count")
    store = manager.create([counter])
    seen: list[int] = []

    def listener() -> None:
        value = store.get_state()["a/count"]
        seen.append(value)
        if value == 1:
            store.dispatch(counter.actions["increment"]())

    unsubscribe = store.subscribe(listener)
    store.dispatch(counter.actions["increment"]())
    unsubscribe()
    store.dispatch(counter.actions["increment"]())

    assert seen == [1, 2]
    assert store.get_state()["a/count"] == 3


def test_dispatch_requires_action_instances() -> None:
    store = DynamicStore().create()
    with pytest.raises(TypeError):
        store.dispatch({"type": "x"})  # type: ignore[arg-type]


def test_runtime_context_reset_clears_bus_and_store() -> None:
    context = RuntimeContext()
    context.store.create([_counter("a/one")])
    context.events.on("x", lambda _: None)

    context.reset()

    assert context.store.registered_slices() == ()
    assert context.events.topics() == ()
