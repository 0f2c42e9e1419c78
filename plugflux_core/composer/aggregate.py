"""Merge the contributions of resolved plugins."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from ..store import EffectInitializer, Slice
from .plugin import Plugin

logger = logging.getLogger(__name__)


@dataclass
class Contributions:
    registries: dict[str, Any] = field(default_factory=dict)
    slices: list[Slice] = field(default_factory=list)
    effects: list[EffectInitializer] = field(default_factory=list)
    actions: dict[str, Callable[..., Any]] = field(default_factory=dict)


def aggregate_provides(plugins: Iterable[Plugin]) -> Contributions:
    """Fold ``provides`` in plugin order.

    Registries and actions are merged with the later plugin winning on a key
    collision; slices and effects are concatenated.
    """

    merged = Contributions()
    owners: dict[tuple[str, str], str] = {}
    for plugin in plugins:
        provides = plugin.provides
        for kind, target, source in (
            ("registry", merged.registries, provides.registries),
            ("action", merged.actions, provides.actions),
        ):
            for key, value in source.items():
                previous = owners.get((kind, key))
                if previous is not None:
                    logger.debug("%s %s from %s overrides %s", kind, key, plugin.name, previous)
                owners[(kind, key)] = plugin.name
                target[key] = value
        merged.slices.extend(provides.slices)
        merged.effects.extend(provides.effects)
    return merged
