"""Syntax profiles, the row highlighter, and profile selection."""

from .defaults import (
    C_PROFILE,
    DEFAULT_PROFILES,
    PYTHON_PROFILE,
    default_registry,
    load_default_profiles,
)
from .highlighter import Highlighter, HighlightTarget, is_separator
from .models import Highlight, SyntaxProfile
from .registry import RegistryStats, SyntaxRegistry

__all__ = [
    "Highlight",
    "SyntaxProfile",
    "Highlighter",
    "HighlightTarget",
    "is_separator",
    "SyntaxRegistry",
    "RegistryStats",
    "C_PROFILE",
    "PYTHON_PROFILE",
    "DEFAULT_PROFILES",
    "load_default_profiles",
    "default_registry",
]
