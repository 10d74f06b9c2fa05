"""Mode manager, edit mode and prompt modes."""

from .base_mode import Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .mode_manager import ModeManager
from .prompt_mode import PromptMode, SaveAsMode, SearchMode

__all__ = [
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "EditMode",
    "PromptMode",
    "SearchMode",
    "SaveAsMode",
    "ModeManager",
]
