"""Navigation plugin: move between screens of registered screensets."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from plugflux_core import Application, Plugin, PluginProvides, RuntimeContext
from plugflux_core.events import Subscription

from .actions import make_action
from .layout import MENU_SLICE, menu_actions
from .screensets import screen_actions

SCREEN_NAVIGATED = "navigation/screen/navigated"
SCREENSET_NAVIGATED = "navigation/screenset/navigated"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigateToScreen:
    screenset_id: str
    screen_id: str


@dataclass(frozen=True)
class NavigateToScreenset:
    screenset_id: str


def navigation(context: RuntimeContext) -> Plugin:
    """Provide ``navigate_to_screen`` and ``navigate_to_screenset``.

    Requires the ``screensets`` plugin. Navigating to an unknown screenset or
    screen is logged and ignored. A screenset navigation goes to that
    screenset's default screen. When the layout menu branch exists its items
    follow the active screenset.
    """

    events = context.events
    events.declare(SCREEN_NAVIGATED, NavigateToScreen)
    events.declare(SCREENSET_NAVIGATED, NavigateToScreenset)
    subscriptions: list[Subscription] = []

    def on_init(app: Application) -> None:
        registry = app.registries.get("screenset_registry")
        current: dict[str, str | None] = {"screenset": None}

        def on_screen(target: NavigateToScreen) -> None:
            screenset = registry.get(target.screenset_id) if registry is not None else None
            if screenset is None or not screenset.has_screen(target.screen_id):
                logger.warning(
                    "cannot navigate to %s/%s: screen is not registered",
                    target.screenset_id,
                    target.screen_id,
                )
                return
            if current["screenset"] != screenset.id and MENU_SLICE in app.store.get_state():
                app.store.dispatch(menu_actions["set_items"](screenset.menu))
            current["screenset"] = screenset.id
            app.store.dispatch(screen_actions["set_active_screen"](target.screen_id))

        def on_screenset(target: NavigateToScreenset) -> None:
            screenset = registry.get(target.screenset_id) if registry is not None else None
            if screenset is None:
                logger.warning("cannot navigate to screenset %s: not registered", target.screenset_id)
                return
            if screenset.default_screen is None:
                logger.warning("screenset %s has no default screen", screenset.id)
                return
            events.emit(SCREEN_NAVIGATED, NavigateToScreen(screenset.id, screenset.default_screen))

        subscriptions.append(events.on(SCREEN_NAVIGATED, on_screen))
        subscriptions.append(events.on(SCREENSET_NAVIGATED, on_screenset))

    def on_destroy(app: Application) -> None:
        while subscriptions:
            subscriptions.pop().unsubscribe()

    return Plugin(
        name="navigation",
        dependencies=("screensets",),
        provides=PluginProvides(
            actions={
                "navigate_to_screen": make_action(events, SCREEN_NAVIGATED),
                "navigate_to_screenset": make_action(events, SCREENSET_NAVIGATED),
            },
        ),
        on_init=on_init,
        on_destroy=on_destroy,
    )
