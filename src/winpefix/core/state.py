"""Processing gate derived from the work-list."""

from collections.abc import Callable
from contextlib import contextmanager
from enum import Enum

from .worklist import WorkList


class SessionState(str, Enum):
    """Observable state of a patch session."""

    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"


class StateController:
    """
    Decides whether the "process" trigger is available.

    The gate is never stored: it is ``not work_list.is_empty()`` at the
    moment of the call. ``refresh`` must run after every work-list mutation
    so the host can update its trigger.
    """

    def __init__(
        self,
        work_list: WorkList,
        on_change: Callable[[bool], None] | None = None,
    ):
        """
        Args:
            work_list: The list the gate is derived from
            on_change: Host callback receiving the gate after each refresh
        """
        self.work_list = work_list
        self.on_change = on_change
        self._running = False

    def is_processing_enabled(self) -> bool:
        return not self.work_list.is_empty()

    def refresh(self) -> bool:
        """Re-evaluate the gate and push it to the host."""
        enabled = self.is_processing_enabled()
        if self.on_change is not None:
            self.on_change(enabled)
        return enabled

    @property
    def state(self) -> SessionState:
        if self._running:
            return SessionState.RUNNING
        return SessionState.READY if self.is_processing_enabled() else SessionState.IDLE

    @contextmanager
    def running(self):
        """Mark a batch as in progress for the duration of the block."""
        self._running = True
        try:
            yield
        finally:
            self._running = False
