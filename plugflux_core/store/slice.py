"""Slice descriptors: a named state branch plus its pure update function."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..errors import ConfigurationError

__all__ = ["Action", "ActionCreator", "Slice", "UpdateFunction", "create_slice", "validate_slice_name"]


@dataclass(frozen=True)
class Action:
    """A dispatched state change request."""

    type: str
    payload: Any = None


UpdateFunction = Callable[[Any, Action], Any]
CaseReducer = Callable[[Any, Action], Any]


def validate_slice_name(name: str) -> str:
    """Check the ``owner/topic`` convention and return ``name`` unchanged.

    Names without ``/`` are reserved for core-owned branches and always pass.
    """

    if not isinstance(name, str) or not name:
        raise ConfigurationError("slice name must be a non-empty string")
    if "/" not in name:
        return name
    parts = name.split("/")
    if len(parts) != 2:
        raise ConfigurationError(
            f"invalid slice name {name!r}: expected 'owner/topic' (exactly two parts), "
            "e.g. 'chat/threads'"
        )
    if not parts[0] or not parts[1]:
        raise ConfigurationError(
            f"invalid slice name {name!r}: owner and topic must both be non-empty"
        )
    return name


@dataclass(frozen=True)
class Slice:
    """A uniquely named state branch.

    ``update`` receives the current branch state and an :class:`Action`, and
    returns the next branch state. ``None`` is a valid branch state: the store
    tracks which branches exist by name, not by value. Only :meth:`reduce`
    treats ``None`` as "no state yet" and substitutes the default.
    """

    name: str
    update: UpdateFunction
    initial_state: Any = None
    actions: Mapping[str, "ActionCreator"] = field(default_factory=dict)

    def get_initial_state(self) -> Any:
        return copy.deepcopy(self.initial_state)

    def reduce(self, state: Any, action: Action) -> Any:
        if state is None:
            state = self.get_initial_state()
        return self.update(state, action)


class ActionCreator:
    """Callable that builds the action for one case reducer."""

    def __init__(self, action_type: str) -> None:
        self.type = action_type

    def __call__(self, payload: Any = None) -> Action:
        return Action(self.type, payload)

    def match(self, action: Action) -> bool:
        return action.type == self.type

    def __repr__(self) -> str:
        return f"<ActionCreator {self.type}>"


def create_slice(
    name: str,
    initial_state: Any,
    reducers: Mapping[str, CaseReducer],
) -> Slice:
    """Build a :class:`Slice` from named case reducers.

    Each reducer handles the action type ``"<name>/<reducer name>"`` and must
    return the next branch state without mutating the one it received.
    ``slice.actions`` holds one :class:`ActionCreator` per reducer.
    """

    cases: dict[str, CaseReducer] = {}
    actions: dict[str, ActionCreator] = {}
    for reducer_name, reducer in reducers.items():
        action_type = f"{name}/{reducer_name}"
        cases[action_type] = reducer
        actions[reducer_name] = ActionCreator(action_type)

    def update(state: Any, action: Action) -> Any:
        reducer = cases.get(action.type)
        if reducer is None:
            return state
        return reducer(state, action)

    return Slice(name=name, update=update, initial_state=initial_state, actions=actions)
