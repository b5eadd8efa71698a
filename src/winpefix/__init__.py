"""
WinPEFix - batch repair of PE executables.

Files are queued in a sorted, duplicate-free work-list and patched one after
another; every attempt is reported in an append-only session log.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import get_config
from .utils.logging import get_logger

from .core import LogSink, PatchSession, ProcessingOutcome, SessionState, WorkList
from .patcher import PELinkFixer, Patcher
from .picker import ArgumentPicker, FilePicker, PromptPicker

__all__ = [
    "get_config",
    "get_logger",
    # Core
    "PatchSession",
    "WorkList",
    "LogSink",
    "ProcessingOutcome",
    "SessionState",
    # Collaborators
    "Patcher",
    "PELinkFixer",
    "FilePicker",
    "ArgumentPicker",
    "PromptPicker",
]
