"""Textual adapter helpers for the kilo editor engine."""

from .controller import TextualEditorAdapter, TextualUIHooks, frame_to_text, translate_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "frame_to_text", "translate_key"]
