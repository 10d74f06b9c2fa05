"""Editor state and structured status messages."""

from .messages import MessageKind, StatusMessage, render_message
from .state import EditorState

__all__ = ["EditorState", "MessageKind", "StatusMessage", "render_message"]
