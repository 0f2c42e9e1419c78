"""Themes plugin: theme registry plus the ``change_theme`` action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from plugflux_core import Application, Plugin, PluginProvides, RuntimeContext
from plugflux_core.events import Subscription

from .actions import make_action
from .registries import Theme, ThemeRegistry

THEME_CHANGED = "theme/changed"


@dataclass(frozen=True)
class ChangeTheme:
    theme_id: str


def themes(context: RuntimeContext, *, initial: Sequence[Theme] = ()) -> Plugin:
    registry = ThemeRegistry()
    for theme in initial:
        registry.add(theme)
    events = context.events
    events.declare(THEME_CHANGED, ChangeTheme)
    subscriptions: list[Subscription] = []

    def on_init(app: Application) -> None:
        def on_changed(payload: ChangeTheme) -> None:
            registry.apply(payload.theme_id)

        subscriptions.append(events.on(THEME_CHANGED, on_changed))

    def on_destroy(app: Application) -> None:
        while subscriptions:
            subscriptions.pop().unsubscribe()

    return Plugin(
        name="themes",
        provides=PluginProvides(
            registries={"theme_registry": registry},
            actions={"change_theme": make_action(events, THEME_CHANGED)},
        ),
        on_init=on_init,
        on_destroy=on_destroy,
    )
