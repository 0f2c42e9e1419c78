"""Layout plugin: header, footer, menu, sidebar, popup and overlay branches."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

from plugflux_core import Application, Plugin, PluginProvides, RuntimeContext, create_slice
from plugflux_core.events import Subscription

from .actions import make_action
from .registries import MenuItem

HEADER_SLICE = "layout/header"
FOOTER_SLICE = "layout/footer"
MENU_SLICE = "layout/menu"
SIDEBAR_SLICE = "layout/sidebar"
POPUP_SLICE = "layout/popup"
OVERLAY_SLICE = "layout/overlay"

POPUP_REQUESTED = "layout/popup/requested"
POPUP_HIDDEN = "layout/popup/hidden"
OVERLAY_REQUESTED = "layout/overlay/requested"
OVERLAY_HIDDEN = "layout/overlay/hidden"
MENU_COLLAPSED = "layout/menu/collapsed"
SIDEBAR_COLLAPSED = "layout/sidebar/collapsed"
HEADER_VISIBILITY = "layout/header/visibility"
FOOTER_VISIBILITY = "layout/footer/visibility"


@dataclass(frozen=True)
class HeaderState:
    visible: bool = True
    user: Any = None


@dataclass(frozen=True)
class FooterState:
    visible: bool = True


@dataclass(frozen=True)
class MenuState:
    collapsed: bool = False
    items: tuple[MenuItem, ...] = ()


@dataclass(frozen=True)
class SidebarState:
    collapsed: bool = False
    visible: bool = True
    position: str = "right"


@dataclass(frozen=True)
class Popup:
    id: str
    title: str = ""
    content: Any = None
    size: str = "md"


@dataclass(frozen=True)
class PopupState:
    stack: tuple[Popup, ...] = ()

    @property
    def top(self) -> Popup | None:
        return self.stack[-1] if self.stack else None


@dataclass(frozen=True)
class OverlayState:
    visible: bool = False
    id: str | None = None


header_slice = create_slice(
    HEADER_SLICE,
    HeaderState(),
    {
        "set_visible": lambda state, action: replace(state, visible=bool(action.payload)),
        "set_user": lambda state, action: replace(state, user=action.payload),
    },
)

footer_slice = create_slice(
    FOOTER_SLICE,
    FooterState(),
    {"set_visible": lambda state, action: replace(state, visible=bool(action.payload))},
)

menu_slice = create_slice(
    MENU_SLICE,
    MenuState(),
    {
        "set_collapsed": lambda state, action: replace(state, collapsed=bool(action.payload)),
        "toggle": lambda state, action: replace(state, collapsed=not state.collapsed),
        "set_items": lambda state, action: replace(state, items=tuple(action.payload)),
    },
)

sidebar_slice = create_slice(
    SIDEBAR_SLICE,
    SidebarState(),
    {
        "set_collapsed": lambda state, action: replace(state, collapsed=bool(action.payload)),
        "toggle": lambda state, action: replace(state, collapsed=not state.collapsed),
        "set_visible": lambda state, action: replace(state, visible=bool(action.payload)),
        "set_position": lambda state, action: replace(state, position=action.payload),
    },
)

popup_slice = create_slice(
    POPUP_SLICE,
    PopupState(),
    {
        "open": lambda state, action: replace(state, stack=(*state.stack, action.payload)),
        "close_top": lambda state, action: replace(state, stack=state.stack[:-1]),
        "close_all": lambda state, action: PopupState(),
    },
)

overlay_slice = create_slice(
    OVERLAY_SLICE,
    OverlayState(),
    {
        "show": lambda state, action: OverlayState(visible=True, id=action.payload),
        "hide": lambda state, action: OverlayState(),
    },
)

header_actions = header_slice.actions
footer_actions = footer_slice.actions
menu_actions = menu_slice.actions
sidebar_actions = sidebar_slice.actions
popup_actions = popup_slice.actions
overlay_actions = overlay_slice.actions


def layout(context: RuntimeContext) -> Plugin:
    """Provide the layout branches; requires the ``screensets`` plugin.

    Actions publish on ``context.events`` and ``on_init`` subscribes on the
    same bus, so the plugin works whichever context the composer was given.
    """

    events = context.events
    events.declare(POPUP_REQUESTED, Popup)
    events.declare(OVERLAY_REQUESTED, str)
    events.declare(MENU_COLLAPSED, bool)
    events.declare(SIDEBAR_COLLAPSED, bool)
    events.declare(HEADER_VISIBILITY, bool)
    events.declare(FOOTER_VISIBILITY, bool)
    subscriptions: list[Subscription] = []

    def on_init(app: Application) -> None:
        dispatch = app.store.dispatch
        wiring: Sequence[tuple[str, Any]] = (
            (POPUP_REQUESTED, lambda popup: dispatch(popup_actions["open"](popup))),
            (POPUP_HIDDEN, lambda _: dispatch(popup_actions["close_top"]())),
            (OVERLAY_REQUESTED, lambda overlay_id: dispatch(overlay_actions["show"](overlay_id))),
            (OVERLAY_HIDDEN, lambda _: dispatch(overlay_actions["hide"]())),
            (MENU_COLLAPSED, lambda collapsed: dispatch(menu_actions["set_collapsed"](collapsed))),
            (
                SIDEBAR_COLLAPSED,
                lambda collapsed: dispatch(sidebar_actions["set_collapsed"](collapsed)),
            ),
            (HEADER_VISIBILITY, lambda visible: dispatch(header_actions["set_visible"](visible))),
            (FOOTER_VISIBILITY, lambda visible: dispatch(footer_actions["set_visible"](visible))),
        )
        for topic, handler in wiring:
            subscriptions.append(events.on(topic, handler))

    def on_destroy(app: Application) -> None:
        while subscriptions:
            subscriptions.pop().unsubscribe()

    return Plugin(
        name="layout",
        dependencies=("screensets",),
        provides=PluginProvides(
            slices=[
                header_slice,
                footer_slice,
                menu_slice,
                sidebar_slice,
                popup_slice,
                overlay_slice,
            ],
            actions={
                "show_popup": make_action(events, POPUP_REQUESTED),
                "hide_popup": make_action(events, POPUP_HIDDEN),
                "show_overlay": make_action(events, OVERLAY_REQUESTED),
                "hide_overlay": make_action(events, OVERLAY_HIDDEN),
                "set_menu_collapsed": make_action(events, MENU_COLLAPSED),
                "set_sidebar_collapsed": make_action(events, SIDEBAR_COLLAPSED),
                "set_header_visible": make_action(events, HEADER_VISIBILITY),
                "set_footer_visible": make_action(events, FOOTER_VISIBILITY),
            },
        ),
        on_init=on_init,
        on_destroy=on_destroy,
    )
