"""Patcher contract shared by the processor and the shipped fixers."""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Patcher(Protocol):
    """
    Attempts the fix on one file at a time.

    ``process`` returns ``False`` on failure; ``get_error_string`` is then
    valid until the next call and returns a non-empty message. Neither
    method raises.
    """

    def process(self, path: str) -> bool: ...

    def get_error_string(self): ...


@dataclass
class PatchResult:
    """What one patch attempt did to a file."""

    path: str
    success: bool
    error_message: str | None = None
    changes: list[str] = field(default_factory=list)
    backup_path: str | None = None

    @property
    def modified(self) -> bool:
        return bool(self.changes)
