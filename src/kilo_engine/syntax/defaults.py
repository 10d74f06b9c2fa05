"""Built-in syntax profiles."""

from __future__ import annotations

from typing import Iterable

from .models import SyntaxProfile
from .registry import SyntaxRegistry

C_EXTENSIONS = (".c", ".h", ".cpp")
C_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return", "else",
    "struct", "union", "typedef", "static", "enum", "class", "case",
    "int|", "long|", "double|", "float|", "char|", "unsigned|", "signed|",
    "void|",
)

PYTHON_EXTENSIONS = (".py", ".pyi")
PYTHON_KEYWORDS = (
    "and", "as", "assert", "async", "await", "break", "class", "continue",
    "def", "del", "elif", "else", "except", "finally", "for", "from", "global",
    "if", "import", "in", "is", "lambda", "nonlocal", "not", "or", "pass",
    "raise", "return", "try", "while", "with", "yield",
    "True|", "False|", "None|", "self|", "int|", "str|", "bytes|", "float|",
    "bool|", "list|", "dict|", "set|", "tuple|",
)

C_PROFILE = SyntaxProfile.from_keyword_table(
    "c",
    C_EXTENSIONS,
    C_KEYWORDS,
    line_comment="//",
    block_comment=("/*", "*/"),
    highlight_numbers=True,
    highlight_strings=True,
)

PYTHON_PROFILE = SyntaxProfile.from_keyword_table(
    "python",
    PYTHON_EXTENSIONS,
    PYTHON_KEYWORDS,
    line_comment="#",
    highlight_numbers=True,
    highlight_strings=True,
)

DEFAULT_PROFILES: tuple[SyntaxProfile, ...] = (C_PROFILE, PYTHON_PROFILE)


def load_default_profiles(
    registry: SyntaxRegistry, profiles: Iterable[SyntaxProfile] = DEFAULT_PROFILES
) -> SyntaxRegistry:
    for profile in profiles:
        if profile.name not in registry:
            registry.register(profile)
    return registry


def default_registry() -> SyntaxRegistry:
    return load_default_profiles(SyntaxRegistry(logger_name="kilo_engine.syntax"))


__all__ = [
    "C_PROFILE",
    "PYTHON_PROFILE",
    "DEFAULT_PROFILES",
    "load_default_profiles",
    "default_registry",
]
