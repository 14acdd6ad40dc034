"""Declarative key-token to action registry.

The built-in bindings live in :mod:`femto.keymaps.defaults`, which depends on
the action modules and is therefore imported explicitly by its users.
"""

from .models import ActionRef, Binding
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
