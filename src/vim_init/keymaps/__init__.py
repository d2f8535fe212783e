"""Key notation, keymap registry and resolution."""

from .models import ActionRef, Binding, KeySequence, KeyStroke
from .notation import ALL_MODES, expand_modes, parse_keys
from .registry import KeymapRegistry, RegistryStats
from .registrar import KeymapDecl, apply_keymaps
from .handlers import ExCommand, HostFunction
from .resolver import KeymapResolver, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "ExCommand",
    "HostFunction",
    "KeymapDecl",
    "apply_keymaps",
    "ALL_MODES",
    "expand_modes",
    "parse_keys",
    "KeymapRegistry",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
]
