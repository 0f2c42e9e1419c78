"""Builtin plugins, registries and presets built on plugflux_core."""

from .actions import make_action
from .layout import layout
from .navigation import NavigateToScreen, NavigateToScreenset, navigation
from .presets import full, headless, minimal, presets
from .registries import MenuItem, Screenset, ScreensetRegistry, Theme, ThemeRegistry
from .screensets import screensets
from .tenant import Tenant, tenant
from .themes import ChangeTheme, themes

__all__ = [
    "ChangeTheme",
    "MenuItem",
    "NavigateToScreen",
    "NavigateToScreenset",
    "Screenset",
    "ScreensetRegistry",
    "Tenant",
    "Theme",
    "ThemeRegistry",
    "full",
    "headless",
    "layout",
    "make_action",
    "minimal",
    "navigation",
    "presets",
    "screensets",
    "tenant",
    "themes",
]
