"""Utility modules for WinPEFix."""

from .encoding import to_native_path, to_path_text, to_text
from .logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "to_text",
    "to_path_text",
    "to_native_path",
]
