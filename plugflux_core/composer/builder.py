"""Composer: accumulate plugins, resolve them and build the application."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Mapping

from ..config import ComposerConfig
from ..context import RuntimeContext
from ..errors import ConfigurationError
from .aggregate import aggregate_provides
from .app import Application
from .plugin import Plugin, PluginFactory, iter_plugin_sources
from .resolver import resolve_order


class ComposerState(Enum):
    """Lifecycle states for a composer."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    BUILDING = "building"
    BUILT = "built"
    FAILED = "failed"
    DESTROYED = "destroyed"


_ACCEPTING = (ComposerState.EMPTY, ComposerState.ACCUMULATING)


class Composer:
    """Collects plugins and turns them into one :class:`Application`.

    ``build`` may run once. Plugins can still be added while ``on_register``
    hooks run; they join the resolved order before contributions are merged.
    Once the register phase is over ``use`` raises.
    """

    def __init__(
        self,
        config: ComposerConfig | Mapping[str, Any] | None = None,
        *,
        context: RuntimeContext | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = ComposerConfig.coerce(config)
        self.context = context or RuntimeContext()
        self.logger = logger or logging.getLogger(__name__)
        self._plugins: dict[str, Plugin] = {}
        self._state = ComposerState.EMPTY
        self._registering = False
        self._app: Application | None = None

    @property
    def state(self) -> ComposerState:
        if self._app is not None and self._app.destroyed:
            return ComposerState.DESTROYED
        return self._state

    def list_plugins(self) -> tuple[str, ...]:
        """Accumulated plugin names in registration order."""

        return tuple(self._plugins)

    def has_plugin(self, name: str) -> bool:
        return name in self._plugins

    def use(self, plugin: Plugin | PluginFactory | Iterable[Any]) -> "Composer":
        """Add a plugin, a zero-argument factory, or a (nested) list of them.

        The first plugin registered under a name wins; later ones are skipped.
        """

        if self._state not in _ACCEPTING and not self._registering:
            raise ConfigurationError(
                f"cannot add plugins to a composer in state {self.state.value!r}"
            )
        for source in iter_plugin_sources(plugin):
            self._add(source.resolve())
        return self

    def use_all(self, plugins: Iterable[Any]) -> "Composer":
        for plugin in plugins:
            self.use(plugin)
        return self

    def build(self) -> Application:
        """Resolve, register, aggregate, create the store and start plugins.

        Raises :class:`CycleError` or (strict mode) :class:`DependencyError`
        before any application exists; a composer whose build failed cannot be
        used again.
        """

        if self._state is ComposerState.FAILED:
            raise ConfigurationError("a previous build() failed; create a new composer")
        if self._state is ComposerState.BUILDING:
            raise ConfigurationError("build() is already running")
        if self._state is ComposerState.BUILT:
            raise ConfigurationError("build() may only be called once per composer")

        self._state = ComposerState.BUILDING
        try:
            app = self._build()
        except Exception:
            self._state = ComposerState.FAILED
            raise
        self._state = ComposerState.BUILT
        self._app = app
        return app

    def _add(self, plugin: Plugin) -> None:
        if plugin.name in self._plugins:
            if self.config.dev_mode:
                self.logger.warning("plugin %s is already registered, skipping duplicate", plugin.name)
            else:
                self.logger.debug("plugin %s is already registered, skipping duplicate", plugin.name)
            return
        self._plugins[plugin.name] = plugin
        if self._state is ComposerState.EMPTY:
            self._state = ComposerState.ACCUMULATING

    def _register_phase(self) -> tuple[Plugin, ...]:
        self._registering = True
        try:
            return self._run_register_hooks()
        finally:
            self._registering = False

    def _run_register_hooks(self) -> tuple[Plugin, ...]:
        registered: set[str] = set()
        reported: set[tuple[str, str]] = set()
        while True:
            resolution = resolve_order(
                tuple(self._plugins.values()),
                strict=self.config.strict_mode,
            )
            for plugin_name, dependency in resolution.missing:
                if (plugin_name, dependency) in reported:
                    continue
                reported.add((plugin_name, dependency))
                self.logger.warning(
                    "plugin %s requires %s but it is not registered; some features may not work",
                    plugin_name,
                    dependency,
                )

            pending = [plugin for plugin in resolution.order if plugin.name not in registered]
            if not pending:
                return resolution.order
            for plugin in pending:
                registered.add(plugin.name)
                if plugin.on_register is not None:
                    plugin.on_register(self, plugin.config)

    def _build(self) -> Application:
        ordered = self._register_phase()
        self.logger.debug("resolved plugin order: %s", ", ".join(p.name for p in ordered))

        contributions = aggregate_provides(ordered)
        store = self.context.store.create(contributions.slices)

        cleanups = []
        started: list[Plugin] = []
        app: Application | None = None
        try:
            for initialize in contributions.effects:
                cleanup = initialize(store.dispatch)
                if callable(cleanup):
                    cleanups.append(cleanup)

            app = Application(
                config=self.config,
                store=store,
                events=self.context.events,
                registries=contributions.registries,
                actions=contributions.actions,
                plugins=ordered,
                cleanups=cleanups,
            )

            for plugin in ordered:
                if plugin.on_init is not None:
                    app.track_init(plugin.name, plugin.on_init(app))
                started.append(plugin)
        except Exception:
            self.logger.error("build of %s failed, rolling back", self.config.name)
            if app is not None:
                app.abort(started)
            else:
                for cleanup in reversed(cleanups):
                    cleanup()
            self.context.store.reset()
            raise

        self.logger.info("built %s with %d plugin(s)", self.config.name, len(ordered))
        return app


def create_composer(
    config: ComposerConfig | Mapping[str, Any] | None = None,
    *,
    context: RuntimeContext | None = None,
    logger: logging.Logger | None = None,
) -> Composer:
    """Return a fresh composer; ``context`` defaults to a new :class:`RuntimeContext`."""

    return Composer(config, context=context, logger=logger)
