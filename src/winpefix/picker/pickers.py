"""File pickers: where the paths of a selection come from."""

import os
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt


class FilePicker(Protocol):
    """
    Source of raw path entries chosen by the operator.

    ``pick`` returns an empty sequence when the selection was cancelled.
    Relative entries are resolved against ``base_directory`` by the caller.
    """

    base_directory: str | None

    def pick(self) -> Sequence[str | bytes]: ...


class ArgumentPicker:
    """Hands out paths given up front (e.g. on the command line) exactly once."""

    def __init__(self, paths: Sequence[str | bytes], base_directory: str | None = None):
        self._pending = list(paths)
        self.base_directory = base_directory

    def pick(self) -> list[str | bytes]:
        picked, self._pending = self._pending, []
        return picked


class PromptPicker:
    """
    Asks for a directory and file names on the terminal.

    Names are shell-quoted and may be relative to the chosen directory.
    Files that do not exist are reported and left out.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.base_directory: str | None = None

    def pick(self) -> list[str]:
        directory = Prompt.ask(
            "Directory", default=os.getcwd(), console=self.console
        ).strip()
        answer = Prompt.ask(
            "Files (space separated, empty to cancel)", default="", console=self.console
        ).strip()
        if not answer:
            return []

        try:
            names = shlex.split(answer)
        except ValueError as e:
            self.console.print(f"[red]Cannot parse file names:[/red] {e}")
            return []

        base = Path(directory).expanduser()
        self.base_directory = str(base)

        picked = []
        for name in names:
            if not Path(os.path.join(base, os.path.expanduser(name))).is_file():
                self.console.print(f"[yellow]Skipping missing file:[/yellow] {name}")
                continue
            picked.append(name)
        return picked
