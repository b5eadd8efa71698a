"""Core module: work-list, log sink, processing gate and batch pipeline."""

from .log_sink import LogListener, LogSink
from .processor import ProcessingOutcome, Processor
from .selector import Selector, normalize_selection
from .session import PatchSession
from .state import SessionState, StateController
from .worklist import WorkList

__all__ = [
    "WorkList",
    "LogSink",
    "LogListener",
    "StateController",
    "SessionState",
    "Selector",
    "normalize_selection",
    "Processor",
    "ProcessingOutcome",
    "PatchSession",
]
