"""Plugin descriptors and the factory-or-instance union resolved by the composer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping, Sequence, Union

from ..errors import ConfigurationError
from ..store import EffectInitializer, Slice

if TYPE_CHECKING:
    from .app import Application
    from .builder import Composer

__all__ = [
    "FactoryPlugin",
    "InstancePlugin",
    "Plugin",
    "PluginFactory",
    "PluginProvides",
    "PluginSource",
    "iter_plugin_sources",
    "plugin_source",
]


@dataclass(frozen=True)
class PluginProvides:
    """What a plugin contributes to the composed application."""

    registries: Mapping[str, Any] = field(default_factory=dict)
    slices: Sequence[Slice] = ()
    effects: Sequence[EffectInitializer] = ()
    actions: Mapping[str, Callable[..., Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "slices", tuple(self.slices))
        object.__setattr__(self, "effects", tuple(self.effects))
        for slice_ in self.slices:
            if not isinstance(slice_, Slice):
                raise TypeError(f"slices must be Slice instances, got {type(slice_).__name__}")
        for effect in self.effects:
            if not callable(effect):
                raise TypeError("effects must be callables taking the store dispatch")


@dataclass(frozen=True)
class Plugin:
    """A named unit of state, wiring, registries and actions plus lifecycle hooks.

    ``on_register(composer, config)`` runs before contributions are merged and
    may add plugins through ``composer.use``. ``on_init(app)`` runs once the
    application exists and may return an awaitable. ``on_destroy(app)`` runs
    in the reverse order of ``on_init``.
    """

    name: str
    dependencies: Sequence[str] = ()
    provides: PluginProvides = field(default_factory=PluginProvides)
    on_register: Callable[["Composer", Any], None] | None = None
    on_init: Callable[["Application"], Any] | None = None
    on_destroy: Callable[["Application"], None] | None = None
    config: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("plugin name must be a non-empty string")
        if isinstance(self.dependencies, str):
            raise ConfigurationError(
                f"dependencies of {self.name!r} must be a sequence of names, not a string"
            )
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        if self.provides is None:
            object.__setattr__(self, "provides", PluginProvides())
        elif isinstance(self.provides, Mapping):
            object.__setattr__(self, "provides", PluginProvides(**self.provides))


PluginFactory = Callable[[], Plugin]


@dataclass(frozen=True)
class InstancePlugin:
    plugin: Plugin

    def resolve(self) -> Plugin:
        return self.plugin


@dataclass(frozen=True)
class FactoryPlugin:
    factory: PluginFactory

    def resolve(self) -> Plugin:
        plugin = self.factory()
        if not isinstance(plugin, Plugin):
            raise ConfigurationError(
                f"plugin factory {getattr(self.factory, '__name__', self.factory)!r} "
                f"returned {type(plugin).__name__}, expected Plugin"
            )
        return plugin


PluginSource = Union[InstancePlugin, FactoryPlugin]


def plugin_source(candidate: Plugin | PluginFactory) -> PluginSource:
    """Tag ``candidate`` as an instance or a zero-argument factory."""

    if isinstance(candidate, Plugin):
        return InstancePlugin(candidate)
    if callable(candidate):
        return FactoryPlugin(candidate)
    raise ConfigurationError(
        f"expected a Plugin, a plugin factory or a list of them, got {type(candidate).__name__}"
    )


def iter_plugin_sources(candidate: Any) -> Iterator[PluginSource]:
    """Flatten nested lists/tuples of plugins and factories, keeping their order."""

    if isinstance(candidate, (list, tuple)):
        for item in candidate:
            yield from iter_plugin_sources(item)
        return
    yield plugin_source(candidate)
