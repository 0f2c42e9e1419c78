"""State container with slices that can be added and removed at runtime."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from ..errors import ConfigurationError, DispatchError
from .combine import CombinedUpdate, combine_updates
from .slice import Action, Slice, validate_slice_name

__all__ = [
    "INIT_ACTION",
    "REPLACE_ACTION",
    "Cleanup",
    "Dispatch",
    "DynamicStore",
    "EffectInitializer",
    "Listener",
    "Store",
]

INIT_ACTION = "@@plugflux/INIT"
REPLACE_ACTION = "@@plugflux/REPLACE"

Dispatch = Callable[[Action], Action]
Listener = Callable[[], None]
Cleanup = Callable[[], None]
EffectInitializer = Callable[[Dispatch], "Cleanup | None"]


class Store:
    """Single-writer state holder driven by one update function."""

    def __init__(self, update: Callable[[Any, Action], Any]) -> None:
        self._update = update
        self._state: Any = None
        self._listeners: list[Listener] = []
        self._dispatching = False
        self.dispatch(Action(INIT_ACTION))

    @property
    def dispatching(self) -> bool:
        return self._dispatching

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, action: Action) -> Action:
        """Run ``action`` through the update function, then notify listeners.

        Listeners run after the update finished, so they may dispatch again.
        Update functions may not.
        """

        if not isinstance(action, Action):
            raise TypeError(f"expected an Action, got {type(action).__name__}")
        if self._dispatching:
            raise DispatchError(
                f"cannot dispatch {action.type!r} while an update function is running"
            )
        self._dispatching = True
        try:
            self._state = self._update(self._state, action)
        finally:
            self._dispatching = False
        for listener in list(self._listeners):
            listener()
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every dispatch; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace_update(self, update: Callable[[Any, Action], Any]) -> None:
        """Swap the update function and let every branch settle on its value."""

        if self._dispatching:
            raise DispatchError("cannot replace the update function during a dispatch")
        self._update = update
        self.dispatch(Action(REPLACE_ACTION))


class DynamicStore:
    """Owns the name -> slice mapping behind one :class:`Store`.

    Every add or remove regenerates the combined update function from the
    mapping; branches that are still registered keep their current values.
    Registering or removing slices from an update function raises
    :class:`DispatchError`. Doing so from an event handler that runs inside a
    store listener is not supported and has undefined results.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._slices: dict[str, Slice] = {}
        self._cleanups: dict[str, Cleanup] = {}
        self._store: Store | None = None

    def create(self, initial_slices: Iterable[Slice] = ()) -> Store:
        """Create the store with ``initial_slices`` in one combinator build."""

        slices: dict[str, Slice] = {}
        for slice_ in initial_slices:
            validate_slice_name(slice_.name)
            if slice_.name in slices:
                self.logger.warning("slice %s is already registered, skipping", slice_.name)
                continue
            slices[slice_.name] = slice_

        self._run_cleanups()
        self._slices = slices
        self._store = Store(self._combined())
        self.logger.debug("store created with slices: %s", ", ".join(slices) or "none")
        return self._store

    def get(self) -> Store:
        """Return the current store, creating an empty one on first use."""

        if self._store is None:
            return self.create()
        return self._store

    def register_slice(
        self,
        slice_: Slice,
        init_effects: EffectInitializer | None = None,
    ) -> None:
        """Add ``slice_`` as a new branch.

        ``init_effects`` runs once with the store's dispatch after the branch is
        in place; a callable it returns is kept and run when the slice is
        unregistered.
        """

        validate_slice_name(slice_.name)
        store = self._require_store("register_slice")
        if store.dispatching:
            raise DispatchError(f"cannot register slice {slice_.name!r} during a dispatch")
        if slice_.name in self._slices:
            self.logger.warning("slice %s is already registered, skipping", slice_.name)
            return

        self._slices[slice_.name] = slice_
        store.replace_update(self._combined())
        self.logger.debug("registered slice %s", slice_.name)

        if init_effects is not None:
            cleanup = init_effects(store.dispatch)
            if callable(cleanup):
                self._cleanups[slice_.name] = cleanup

    def unregister_slice(self, name: str) -> None:
        if name not in self._slices or self._store is None:
            self.logger.warning("slice %s is not registered, skipping", name)
            return
        if self._store.dispatching:
            raise DispatchError(f"cannot unregister slice {name!r} during a dispatch")

        cleanup = self._cleanups.pop(name, None)
        if cleanup is not None:
            cleanup()
        del self._slices[name]
        self._store.replace_update(self._combined())
        self.logger.debug("unregistered slice %s", name)

    def has_slice(self, name: str) -> bool:
        return name in self._slices

    def registered_slices(self) -> tuple[str, ...]:
        return tuple(self._slices)

    def reset(self) -> None:
        """Forget every slice, cleanup and the store itself.

        Meant for reinitialising a whole environment, e.g. between tests.
        """

        self._run_cleanups()
        self._slices = {}
        self._store = None

    def _combined(self) -> CombinedUpdate:
        return combine_updates(self._slices)

    def _require_store(self, operation: str) -> Store:
        if self._store is None:
            raise ConfigurationError(
                f"store has not been created; call create() before {operation}()"
            )
        return self._store

    def _run_cleanups(self) -> None:
        cleanups = list(self._cleanups.values())
        self._cleanups.clear()
        for cleanup in reversed(cleanups):
            cleanup()
