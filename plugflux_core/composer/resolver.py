"""Dependency-first ordering of plugins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..errors import CycleError, DependencyError
from .plugin import Plugin


@dataclass(frozen=True)
class Resolution:
    """Resolved plugin order plus the dependency edges that were dropped."""

    order: tuple[Plugin, ...]
    missing: tuple[tuple[str, str], ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(plugin.name for plugin in self.order)


def resolve_order(plugins: Sequence[Plugin], *, strict: bool = False) -> Resolution:
    """Depth-first, post-order topological sort.

    Plugins are visited in the order given; each one is appended after all of
    its dependencies. A dependency that is not in ``plugins`` raises
    :class:`DependencyError` when ``strict``; otherwise the edge is dropped and
    reported in ``Resolution.missing``.
    """

    by_name = {plugin.name: plugin for plugin in plugins}
    resolved: list[Plugin] = []
    visited: set[str] = set()
    stack: list[str] = []
    missing: list[tuple[str, str]] = []

    def visit(plugin: Plugin) -> None:
        if plugin.name in visited:
            return
        if plugin.name in stack:
            raise CycleError(plugin.name, stack[stack.index(plugin.name):])

        stack.append(plugin.name)
        for dependency_name in plugin.dependencies:
            dependency = by_name.get(dependency_name)
            if dependency is None:
                if strict:
                    raise DependencyError(plugin.name, dependency_name)
                missing.append((plugin.name, dependency_name))
                continue
            visit(dependency)
        stack.pop()

        visited.add(plugin.name)
        resolved.append(plugin)

    for plugin in plugins:
        visit(plugin)

    return Resolution(order=tuple(resolved), missing=tuple(missing))
