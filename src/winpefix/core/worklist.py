"""Ordered, deduplicated collection of pending file paths."""

from collections.abc import Iterable, Iterator


class WorkList:
    """
    Pending file paths, kept sorted ascending and free of duplicates.

    Only ``merge`` and ``clear`` mutate the list.
    """

    def __init__(self):
        self._paths: list[str] = []

    def merge(self, paths: Iterable[str]) -> None:
        """
        Add paths to the list.

        Args:
            paths: New paths; may repeat each other or already pending entries
        """
        incoming = list(paths)
        if not incoming:
            return
        self._paths = sorted(set(self._paths).union(incoming))

    def clear(self) -> None:
        """Remove every pending path."""
        self._paths = []

    def is_empty(self) -> bool:
        return not self._paths

    @property
    def paths(self) -> tuple[str, ...]:
        """Snapshot of the pending paths in processing order."""
        return tuple(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"WorkList({self._paths!r})"
