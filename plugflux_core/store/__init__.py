"""Dynamic state store: slices, the combinator and the store itself."""

from .combine import CombinedUpdate, combine_updates
from .slice import Action, ActionCreator, Slice, create_slice, validate_slice_name
from .store import (
    INIT_ACTION,
    REPLACE_ACTION,
    Dispatch,
    DynamicStore,
    EffectInitializer,
    Store,
)

__all__ = [
    "Action",
    "ActionCreator",
    "CombinedUpdate",
    "Dispatch",
    "DynamicStore",
    "EffectInitializer",
    "INIT_ACTION",
    "REPLACE_ACTION",
    "Slice",
    "Store",
    "combine_updates",
    "create_slice",
    "validate_slice_name",
]
