"""Append-only log of selection and processing activity."""

from typing import Protocol

from ..utils.encoding import to_text
from ..utils.logging import get_logger

logger = get_logger(__name__)


class LogListener(Protocol):
    """A display surface fed by a ``LogSink``."""

    def on_append(self, line: str) -> None: ...

    def on_clear(self) -> None: ...


class LogSink:
    """
    Growable line buffer.

    Lines are kept in call order and are never removed individually. There is
    no size limit; the buffer lives as long as the session does.
    """

    def __init__(self):
        self._lines: list[str] = []
        self._listeners: list[LogListener] = []

    def subscribe(self, listener: LogListener) -> None:
        """Register a display surface to be notified of appends and clears."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, line) -> None:
        """
        Add one line at the end.

        Args:
            line: ``str`` or ``bytes``; converted to text before it is stored
        """
        text = to_text(line)
        self._lines.append(text)
        logger.debug(text)
        for listener in self._listeners:
            listener.on_append(text)

    def clear(self) -> None:
        """Remove all lines."""
        self._lines.clear()
        for listener in self._listeners:
            listener.on_clear()

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def text(self) -> str:
        """All lines joined for display."""
        return "\n".join(self._lines)

    def __iter__(self):
        return iter(tuple(self._lines))

    def __len__(self) -> int:
        return len(self._lines)
