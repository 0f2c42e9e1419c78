"""Plugin composition: descriptors, dependency resolution and the builder."""

from .app import ActionTable, Application
from .builder import Composer, ComposerState, create_composer
from .plugin import (
    FactoryPlugin,
    InstancePlugin,
    Plugin,
    PluginFactory,
    PluginProvides,
    PluginSource,
    plugin_source,
)
from .resolver import Resolution, resolve_order

__all__ = [
    "ActionTable",
    "Application",
    "Composer",
    "ComposerState",
    "FactoryPlugin",
    "InstancePlugin",
    "Plugin",
    "PluginFactory",
    "PluginProvides",
    "PluginSource",
    "Resolution",
    "create_composer",
    "plugin_source",
    "resolve_order",
]
