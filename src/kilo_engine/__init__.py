"""UI-agnostic engine for a small kilo-style terminal text editor."""

__all__ = [
    "adapters",
    "actions",
    "config",
    "document",
    "editor",
    "keymaps",
    "keys",
    "modes",
    "runtime",
    "search",
    "syntax",
    "view",
]

__version__ = "0.1.0"
