"""Ready-made plugin bundles."""

from __future__ import annotations

from typing import Callable

from plugflux_core import Plugin, RuntimeContext

from .layout import layout
from .navigation import navigation
from .screensets import screensets
from .tenant import tenant
from .themes import themes

Preset = Callable[[RuntimeContext], list[Plugin]]


def headless(context: RuntimeContext) -> list[Plugin]:
    """Screensets only: state and navigation targets without any layout."""

    return [screensets(context)]


def minimal(context: RuntimeContext) -> list[Plugin]:
    return [screensets(context), themes(context)]


def full(context: RuntimeContext) -> list[Plugin]:
    return [
        screensets(context),
        themes(context),
        layout(context),
        navigation(context),
        tenant(context),
    ]


presets: dict[str, Preset] = {
    "headless": headless,
    "minimal": minimal,
    "full": full,
}
