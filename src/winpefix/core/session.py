"""Patch session: owns the work-list, the log and the processing gate."""

from collections.abc import Callable

from ..patcher import Patcher
from ..picker import FilePicker
from .log_sink import LogSink
from .processor import ProcessingOutcome, Processor
from .selector import Selector
from .state import SessionState, StateController
from .worklist import WorkList


class PatchSession:
    """
    Single owner of the mutable state behind the two host triggers.

    ``select`` queues files chosen through the picker; ``process`` runs one
    batch over them. Both run synchronously on the caller's thread.
    """

    def __init__(
        self,
        patcher: Patcher,
        picker: FilePicker,
        log_sink: LogSink | None = None,
        on_state_change: Callable[[bool], None] | None = None,
    ):
        """
        Initialize the session.

        Args:
            patcher: Fix applied to each file
            picker: Source of selections
            log_sink: Log to write to; a new one if None
            on_state_change: Called with the processing gate after every change
        """
        self.work_list = WorkList()
        self.log = log_sink if log_sink is not None else LogSink()
        self.controller = StateController(self.work_list, on_state_change)
        self.selector = Selector(picker, self.work_list, self.log, self.controller)
        self.processor = Processor(patcher, self.work_list, self.log, self.controller)
        self.controller.refresh()

    def select(self) -> list[str]:
        return self.selector.select()

    def process(self) -> list[ProcessingOutcome]:
        return self.processor.run_batch()

    def clear_log(self) -> None:
        self.log.clear()

    def is_processing_enabled(self) -> bool:
        return self.controller.is_processing_enabled()

    @property
    def state(self) -> SessionState:
        return self.controller.state

    @property
    def pending(self) -> tuple[str, ...]:
        return self.work_list.paths
