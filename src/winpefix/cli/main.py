"""Main CLI interface for WinPEFix using Click."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .. import __version__
from ..config import WinPEFixConfig, get_config_manager
from ..core import PatchSession, SessionState
from ..patcher import PELinkFixer
from ..picker import ArgumentPicker, PromptPicker
from ..utils.logging import get_logger, setup_logging
from .view import ConsoleLogView

console = Console()
logger = get_logger(__name__)

SHELL_COMMANDS = ("select", "process", "list", "log", "clear", "help", "quit")


def _load_config(ctx) -> WinPEFixConfig:
    """Load configuration and apply its logging settings."""
    config_manager = get_config_manager(ctx.obj.get("config_path"))
    config = config_manager.load(create_if_missing=True)
    setup_logging(config.logging)
    return config


@click.group()
@click.version_option(version=__version__, prog_name="WinPEFix")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx, config: Optional[Path]):
    """
    WinPEFix - batch repair of PE executables.

    Queue executables, then patch them one after another. Each file is
    attempted once; a failure is reported and the batch moves on.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.pass_context
def fix(ctx, files: tuple[str, ...]):
    """
    Patch FILES in a single batch.

    Exits with status 1 if any file could not be patched.
    """
    try:
        config = _load_config(ctx)
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        logger.exception("Configuration error")
        sys.exit(1)

    session = PatchSession(
        patcher=PELinkFixer(config.patcher),
        picker=ArgumentPicker(files),
    )
    session.log.subscribe(ConsoleLogView(console))

    session.select()
    outcomes = session.process()

    failed = [o for o in outcomes if not o.succeeded]
    if failed:
        console.print(f"\n[yellow]⚠ {len(failed)} of {len(outcomes)} file(s) failed[/yellow]")
        sys.exit(1)
    console.print(f"\n[green]✓ {len(outcomes)} file(s) patched[/green]")


def _print_pending(session: PatchSession):
    if not session.pending:
        console.print("[dim]No files pending.[/dim]")
        return
    table = Table(title="Pending files", show_header=True, header_style="bold cyan")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Path", style="green")
    for i, path in enumerate(session.pending, 1):
        table.add_row(str(i), path)
    console.print(table)


def _print_help():
    console.print("[yellow]Commands:[/yellow]")
    console.print("  [green]select[/green]  - Add files to the pending list")
    console.print("  [green]process[/green] - Patch all pending files")
    console.print("  [green]list[/green]    - Show pending files")
    console.print("  [green]log[/green]     - Show the session log")
    console.print("  [green]clear[/green]   - Clear the session log")
    console.print("  [green]quit[/green]    - Leave the shell")


@cli.command()
@click.pass_context
def shell(ctx):
    """
    Interactive session: select files, then process them.

    The process command is available only while files are pending.
    """
    try:
        config = _load_config(ctx)
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        logger.exception("Configuration error")
        sys.exit(1)

    gate = {"enabled": False}

    def on_state_change(enabled: bool):
        gate["enabled"] = enabled

    session = PatchSession(
        patcher=PELinkFixer(config.patcher),
        picker=PromptPicker(console),
        on_state_change=on_state_change,
    )
    session.log.subscribe(ConsoleLogView(console))

    console.print("\n[bold cyan]WinPEFix[/bold cyan]\n")
    _print_help()

    while True:
        label = "ready" if session.state is SessionState.READY else "idle"
        console.print()
        choices = [c for c in SHELL_COMMANDS if c != "process" or gate["enabled"]]
        command = Prompt.ask(
            escape(f"[{label}]"),
            choices=choices,
            default="process" if gate["enabled"] else "select",
        )

        if command == "select":
            session.select()
        elif command == "process":
            session.process()
        elif command == "list":
            _print_pending(session)
        elif command == "log":
            console.print(session.log.text() or "[dim](empty)[/dim]", highlight=False)
        elif command == "clear":
            session.clear_log()
        elif command == "help":
            _print_help()
        elif command == "quit":
            break


@cli.group(name="config")
def config_group():
    """Manage WinPEFix configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    """Display current configuration."""
    console.print("\n[bold cyan]WinPEFix Configuration[/bold cyan]\n")

    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config = config_manager.load(create_if_missing=True)

        console.print("[bold]Patcher:[/bold]")
        console.print(f"  Target OS Version: {config.patcher.target_os_version}")
        console.print(f"  Target Subsystem Version: {config.patcher.target_subsystem_version}")
        console.print(f"  Update Checksum: {config.patcher.update_checksum}")
        console.print(f"  Create Backup: {config.patcher.create_backup}")
        console.print(f"  Backup Suffix: {config.patcher.backup_suffix}")

        console.print("\n[bold]Logging:[/bold]")
        console.print(f"  Level: {config.logging.level}")
        console.print(f"  Log Dir: {config.logging.log_dir}")
        console.print(f"  File Logging: {config.logging.file_enabled}")

        source = config_manager.config_path or "(defaults)"
        console.print(f"\n[dim]Config file: {source}[/dim]")

    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        logger.exception("Config show error")
        sys.exit(1)


@config_group.command(name="init")
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("config/winpefix.yaml"),
    show_default=True,
    help="Where to write the configuration file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_init(ctx, path: Path, force: bool):
    """Write a configuration file with default settings."""
    if path.exists() and not force:
        console.print(f"[yellow]⚠ {escape(str(path))} already exists (use --force to overwrite)[/yellow]")
        sys.exit(1)

    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config_manager.save(WinPEFixConfig(), path)
        console.print(f"✓ Created configuration: [green]{path}[/green]")
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        logger.exception("Config init error")
        sys.exit(1)


if __name__ == "__main__":
    cli()
