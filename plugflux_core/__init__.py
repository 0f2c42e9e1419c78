"""Core runtime pieces for composing plugins into one application."""

from .composer import (
    Application,
    Composer,
    Plugin,
    PluginProvides,
    create_composer,
)
from .config import ComposerConfig, default_config_path, load_config
from .context import RuntimeContext
from .errors import (
    ConfigurationError,
    CycleError,
    DependencyError,
    DispatchError,
    EventPayloadError,
    PlugfluxError,
)
from .events import EventBus, Subscription
from .registry import Registry
from .store import Action, DynamicStore, Slice, Store, create_slice

__all__ = [
    "Action",
    "Application",
    "Composer",
    "ComposerConfig",
    "ConfigurationError",
    "CycleError",
    "DependencyError",
    "DispatchError",
    "DynamicStore",
    "EventBus",
    "EventPayloadError",
    "PlugfluxError",
    "Plugin",
    "PluginProvides",
    "Registry",
    "RuntimeContext",
    "Slice",
    "Store",
    "Subscription",
    "create_composer",
    "create_slice",
    "default_config_path",
    "load_config",
]
