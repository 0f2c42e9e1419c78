"""The assembled application handle returned by ``Composer.build``."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterator, Mapping, Sequence

from ..config import ComposerConfig
from ..events import EventBus
from ..store import Store
from ..store.store import Cleanup
from .plugin import Plugin


class ActionTable(Mapping[str, Callable[..., Any]]):
    """Read-only action mapping that also allows ``actions.change_theme(...)``."""

    def __init__(self, actions: Mapping[str, Callable[..., Any]]) -> None:
        self._actions = dict(actions)

    def __getitem__(self, key: str) -> Callable[..., Any]:
        return self._actions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        try:
            return self.__dict__["_actions"][name]
        except KeyError:
            raise AttributeError(f"no action named {name!r}") from None

    def __repr__(self) -> str:
        return f"ActionTable({', '.join(self._actions)})"


class Application:
    """Owns the store and the resolved plugins of one composition.

    Registries are reachable both as ``app.registries[key]`` and as
    attributes (``app.theme_registry``). An application is destroyed once.
    """

    def __init__(
        self,
        *,
        config: ComposerConfig,
        store: Store,
        events: EventBus,
        registries: Mapping[str, Any],
        actions: Mapping[str, Callable[..., Any]],
        plugins: Sequence[Plugin],
        cleanups: Sequence[Cleanup] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.events = events
        self.registries: Mapping[str, Any] = dict(registries)
        self.actions = ActionTable(actions)
        self._plugins = tuple(plugins)
        self._cleanups = list(cleanups)
        self._pending: list[Awaitable[Any]] = []
        self._destroyed = False
        self.logger = logger or logging.getLogger(__name__)

    def __getattr__(self, name: str) -> Any:
        registries = self.__dict__.get("registries", {})
        if name in registries:
            return registries[name]
        raise AttributeError(f"{type(self).__name__!s} has no attribute or registry {name!r}")

    @property
    def plugins(self) -> tuple[str, ...]:
        """Plugin names in resolved (dependency-first) order."""

        return tuple(plugin.name for plugin in self._plugins)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def pending(self) -> tuple[Awaitable[Any], ...]:
        return tuple(self._pending)

    def track_init(self, plugin: str, result: Any) -> None:
        """Keep an awaitable returned by ``on_init`` without waiting for it.

        With a running event loop the awaitable is scheduled right away;
        otherwise it stays pending until :meth:`wait_ready` awaits it.
        """

        if not inspect.isawaitable(result):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.logger.debug("on_init of %s is pending until wait_ready()", plugin)
            self._pending.append(result)
            return
        self._pending.append(asyncio.ensure_future(result))

    async def wait_ready(self) -> None:
        """Await every pending ``on_init`` completion."""

        while self._pending:
            pending, self._pending = self._pending, []
            await asyncio.gather(*pending)

    def destroy(self) -> None:
        """Run ``on_destroy`` in reverse resolved order, then the effect cleanups."""

        if self._destroyed:
            self.logger.warning("application %s is already destroyed", self.config.name)
            return
        self._teardown(self._plugins)

    def abort(self, started: Sequence[Plugin]) -> None:
        """Tear down an application whose start-up failed.

        Only ``started`` plugins get ``on_destroy``; effect cleanups all run.
        """

        if self._destroyed:
            return
        self.logger.debug("aborting %s after %d started plugin(s)", self.config.name, len(started))
        self._teardown(started)

    def _teardown(self, plugins: Sequence[Plugin]) -> None:
        self._destroyed = True
        self._drop_pending()

        for plugin in reversed(tuple(plugins)):
            if plugin.on_destroy is not None:
                self.logger.debug("destroying plugin %s", plugin.name)
                plugin.on_destroy(self)

        cleanups, self._cleanups = self._cleanups, []
        for cleanup in reversed(cleanups):
            cleanup()

    def _drop_pending(self) -> None:
        for awaitable in self._pending:
            if isinstance(awaitable, asyncio.Future):
                if not awaitable.done():
                    awaitable.cancel()
            elif inspect.iscoroutine(awaitable):
                awaitable.close()
        self._pending = []

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else "running"
        return f"<Application {self.config.name!r} {state} plugins={list(self.plugins)}>"
