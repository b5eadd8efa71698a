"""Rich display surface for a session log."""

from rich.console import Console
from rich.markup import escape

from ..core.processor import DONE_LINE, ERROR_PREFIX, START_LINE
from ..core.selector import SELECTED_HEADER


class ConsoleLogView:
    """Prints log lines as they are appended."""

    def __init__(self, console: Console):
        self.console = console

    def on_append(self, line: str) -> None:
        if line.startswith(ERROR_PREFIX):
            self.console.print(f"  [red]{escape(line)}[/red]")
        elif line in (START_LINE, DONE_LINE, SELECTED_HEADER):
            self.console.print(f"[bold cyan]{escape(line)}[/bold cyan]")
        else:
            self.console.print(escape(line), highlight=False)

    def on_clear(self) -> None:
        self.console.clear()
