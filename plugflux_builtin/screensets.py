"""Screensets plugin: the screenset registry and the active-screen branch."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from plugflux_core import Plugin, PluginProvides, RuntimeContext, create_slice
from plugflux_core.store import Dispatch

from .actions import make_action
from .registries import Screenset, ScreensetRegistry

__all__ = [
    "SCREEN_ACTIVATED",
    "SCREEN_LOADING",
    "SCREEN_SLICE",
    "ScreenState",
    "active_screen",
    "screen_actions",
    "screen_slice",
    "screensets",
]

SCREEN_SLICE = "layout/screen"
SCREEN_ACTIVATED = "layout/screen/activated"
SCREEN_LOADING = "layout/screen/loading"


@dataclass(frozen=True)
class ScreenState:
    active_screen: str | None = None
    loading: bool = False


screen_slice = create_slice(
    SCREEN_SLICE,
    ScreenState(),
    {
        "set_active_screen": lambda state, action: replace(
            state, active_screen=action.payload, loading=False
        ),
        "set_loading": lambda state, action: replace(state, loading=bool(action.payload)),
        "clear": lambda state, action: ScreenState(),
    },
)
screen_actions = screen_slice.actions


def screensets(
    context: RuntimeContext,
    *,
    initial: Sequence[Screenset] = (),
) -> Plugin:
    """Provide ``screenset_registry`` and the ``layout/screen`` branch.

    ``set_active_screen`` and ``set_screen_loading`` publish events; the
    plugin's effect turns them into store updates.
    """

    registry = ScreensetRegistry()
    registry.add_many(initial)
    events = context.events
    events.declare(SCREEN_ACTIVATED, str)
    events.declare(SCREEN_LOADING, bool)

    def wire_screen(dispatch: Dispatch):
        def on_activated(screen_id: str) -> None:
            dispatch(screen_actions["set_active_screen"](screen_id))

        def on_loading(loading: bool) -> None:
            dispatch(screen_actions["set_loading"](loading))

        subscriptions = [
            events.on(SCREEN_ACTIVATED, on_activated),
            events.on(SCREEN_LOADING, on_loading),
        ]

        def cleanup() -> None:
            for subscription in subscriptions:
                subscription.unsubscribe()

        return cleanup

    return Plugin(
        name="screensets",
        provides=PluginProvides(
            registries={"screenset_registry": registry},
            slices=[screen_slice],
            effects=[wire_screen],
            actions={
                "set_active_screen": make_action(events, SCREEN_ACTIVATED),
                "set_screen_loading": make_action(events, SCREEN_LOADING),
            },
        ),
    )


def active_screen(state: dict) -> str | None:
    screen: ScreenState | None = state.get(SCREEN_SLICE)
    return None if screen is None else screen.active_screen
