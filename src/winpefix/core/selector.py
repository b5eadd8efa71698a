"""Turns a file picker selection into pending work."""

import os
from collections.abc import Sequence

from ..picker import FilePicker
from ..utils.encoding import to_path_text
from ..utils.logging import get_logger
from .log_sink import LogSink
from .state import StateController
from .worklist import WorkList

logger = get_logger(__name__)

SELECTED_HEADER = "Selected files:"
ITEM_PREFIX = " - "


def normalize_selection(
    raw_paths: Sequence[str | bytes], base_directory: str | None = None
) -> list[str]:
    """
    Convert raw picker entries into absolute file paths.

    Relative entries are combined with ``base_directory`` (the current
    directory if None). Repeated entries are kept once, in the order first
    seen; blank entries are dropped.
    """
    base = os.path.expanduser(base_directory) if base_directory else os.getcwd()
    paths: list[str] = []
    seen: set[str] = set()
    for raw in raw_paths:
        text = to_path_text(raw).strip()
        if not text:
            continue
        path = os.path.normpath(os.path.join(base, os.path.expanduser(text)))
        if path not in seen:
            seen.add(path)
            paths.append(path)
    return paths


class Selector:
    """Runs the picker and merges what it returns into the work-list."""

    def __init__(
        self,
        picker: FilePicker,
        work_list: WorkList,
        log_sink: LogSink,
        state: StateController,
    ):
        self.picker = picker
        self.work_list = work_list
        self.log_sink = log_sink
        self.state = state

    def select(self) -> list[str]:
        """
        Ask the picker for files and queue them.

        A cancelled pick changes nothing and logs nothing.

        Returns:
            The paths of this selection, as logged
        """
        raw = self.picker.pick()
        if not raw:
            logger.debug("Selection cancelled")
            return []

        paths = normalize_selection(raw, getattr(self.picker, "base_directory", None))
        if not paths:
            return []

        self.work_list.merge(paths)
        self.log_sink.append(SELECTED_HEADER)
        for path in paths:
            self.log_sink.append(f"{ITEM_PREFIX}{path}")

        self.state.refresh()
        logger.info(f"Selected {len(paths)} file(s), {len(self.work_list)} pending")
        return paths
