"""File pickers feeding selections into a session."""

from .pickers import ArgumentPicker, FilePicker, PromptPicker

__all__ = ["FilePicker", "ArgumentPicker", "PromptPicker"]
