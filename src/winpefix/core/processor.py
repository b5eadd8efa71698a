"""Batch pass over the work-list."""

from dataclasses import dataclass

from ..patcher import Patcher
from ..utils.encoding import to_native_path, to_text
from ..utils.logging import get_logger
from .log_sink import LogSink
from .state import StateController
from .worklist import WorkList

logger = get_logger(__name__)

START_LINE = "Processing..."
DONE_LINE = "Done."
ITEM_PREFIX = " - "
ERROR_PREFIX = "error: "


@dataclass(frozen=True)
class ProcessingOutcome:
    """Result of one patch attempt within a batch."""

    path: str
    succeeded: bool
    message: str | None = None

    @classmethod
    def success(cls, path: str) -> "ProcessingOutcome":
        return cls(path=path, succeeded=True)

    @classmethod
    def failure(cls, path: str, message: str) -> "ProcessingOutcome":
        return cls(path=path, succeeded=False, message=message)


class Processor:
    """
    Runs the patcher once over every pending file.

    A failed file is logged and the batch moves on; nothing a single file
    does can stop the others from being attempted. The work-list is empty
    when the batch returns.
    """

    def __init__(
        self,
        patcher: Patcher,
        work_list: WorkList,
        log_sink: LogSink,
        state: StateController,
    ):
        self.patcher = patcher
        self.work_list = work_list
        self.log_sink = log_sink
        self.state = state

    def _attempt(self, path: str) -> ProcessingOutcome:
        try:
            if self.patcher.process(to_native_path(path)):
                return ProcessingOutcome.success(path)
            message = to_text(self.patcher.get_error_string())
        except Exception as e:
            # Patchers must not raise; keep the batch going if one does
            logger.exception(f"Patcher raised on {path}")
            message = to_text(str(e) or type(e).__name__)
        return ProcessingOutcome.failure(path, message)

    def run_batch(self) -> list[ProcessingOutcome]:
        """
        Attempt every pending file in order, then reset the work-list.

        Returns:
            One outcome per attempted file, in processing order
        """
        outcomes: list[ProcessingOutcome] = []

        with self.state.running():
            self.log_sink.append(START_LINE)
            for path in self.work_list:
                self.log_sink.append(f"{ITEM_PREFIX}{path}")
                outcome = self._attempt(path)
                if not outcome.succeeded:
                    self.log_sink.append(f"{ERROR_PREFIX}{outcome.message}")
                    logger.info(f"Failed to patch {path}: {outcome.message}")
                outcomes.append(outcome)

            self.work_list.clear()
            self.log_sink.append(DONE_LINE)

        self.state.refresh()

        failed = sum(1 for o in outcomes if not o.succeeded)
        logger.info(f"Batch finished: {len(outcomes)} attempted, {failed} failed")
        return outcomes
