"""Key bindings: models, registry and defaults."""

from .defaults import DEFAULT_BINDINGS, EDIT_MODE, default_actions, load_default_keymaps
from .models import ActionRef, Binding, ResolutionMatch
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats

__all__ = [
    "ActionRef",
    "Binding",
    "ResolutionMatch",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "EDIT_MODE",
    "default_actions",
    "load_default_keymaps",
]
