"""Pure combinator over a mapping of branch update functions."""

from __future__ import annotations

from typing import Any, Mapping

from .slice import Action, Slice

__all__ = ["CombinedUpdate", "combine_updates"]


class CombinedUpdate:
    """Route an action through every branch and key the results by branch name.

    The combinator is a projection of the mapping it was built from: it never
    changes after construction. Branches missing from the incoming state start
    from their own default; a branch whose stored value is ``None`` keeps it.
    Keys without a branch are dropped. When no branch produced a new object
    the incoming state object is returned as-is.
    """

    def __init__(self, slices: Mapping[str, Slice]) -> None:
        self._slices = dict(slices)

    @property
    def branches(self) -> tuple[str, ...]:
        return tuple(self._slices)

    def __call__(self, state: Mapping[str, Any] | None, action: Action) -> dict[str, Any]:
        previous = state if state is not None else {}
        next_state: dict[str, Any] = {}
        changed = state is None or previous.keys() != self._slices.keys()
        for name, slice_ in self._slices.items():
            if name in previous:
                before = previous[name]
                after = slice_.update(before, action)
            else:
                before = None
                after = slice_.update(slice_.get_initial_state(), action)
            next_state[name] = after
            if after is not before:
                changed = True
        if not changed and isinstance(previous, dict):
            return previous
        return next_state


def combine_updates(slices: Mapping[str, Slice]) -> CombinedUpdate:
    return CombinedUpdate(slices)
