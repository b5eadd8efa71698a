"""Patchers applied to each selected file."""

from .base import Patcher, PatchResult
from .linkfix import PELinkFixer

__all__ = [
    "Patcher",
    "PatchResult",
    "PELinkFixer",
]
