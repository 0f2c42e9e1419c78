"""Registries for screensets and themes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from plugflux_core.registry import Registry, RegistryKeyError


@dataclass(frozen=True)
class MenuItem:
    id: str
    label: str
    icon: str | None = None


@dataclass(frozen=True)
class Screenset:
    """A group of screens reachable under one identifier."""

    id: str
    name: str
    screens: Mapping[str, Any] = field(default_factory=dict)
    menu: Sequence[MenuItem] = ()
    default_screen: str | None = None

    def has_screen(self, screen_id: str) -> bool:
        return screen_id in self.screens


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    variables: Mapping[str, str] = field(default_factory=dict)
    default: bool = False


class ScreensetRegistry(Registry[Screenset]):
    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        super().__init__("screenset_registry", logger=logger)

    def add(self, screenset: Screenset, *, replace: bool = False) -> None:
        self.register(screenset.id, screenset, replace=replace)

    def add_many(self, screensets: Sequence[Screenset]) -> None:
        for screenset in screensets:
            self.add(screenset)

    def has_screen(self, screenset_id: str, screen_id: str) -> bool:
        screenset = self.get(screenset_id)
        return screenset is not None and screenset.has_screen(screen_id)


class ThemeRegistry(Registry[Theme]):
    """Themes plus the one currently applied.

    The first theme flagged ``default`` (or else the first theme added) is
    current until :meth:`apply` picks another one.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        super().__init__("theme_registry", logger=logger)
        self._current: str | None = None

    def add(self, theme: Theme, *, replace: bool = False) -> None:
        self.register(theme.id, theme, replace=replace)
        if self._current is None or (theme.default and not self.require(self._current).default):
            self._current = theme.id

    def apply(self, theme_id: str) -> Theme:
        theme = self.require(theme_id)
        self._current = theme_id
        self.logger.debug("applied theme %s", theme_id)
        return theme

    @property
    def current(self) -> Theme | None:
        if self._current is None:
            return None
        try:
            return self.require(self._current)
        except RegistryKeyError:
            return None

    def clear(self) -> None:
        super().clear()
        self._current = None
