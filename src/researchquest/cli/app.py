# src/researchquest/cli/app.py
"""Command-line interface for researchquest.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from researchquest import __version__
from researchquest.commands import clear, config_cmd, dismiss, list_cmd, refresh
from researchquest.commands.base import ConfirmRequest, QuestInfo
from researchquest.config import load_env_file

app = typer.Typer(
    name="researchquest",
    help="researchquest - keep a fresh set of research questions for each note.",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLES = {
    "active": "green",
    "completed": "blue",
    "dismissed": "dim",
    "obsolete": "yellow",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"researchquest {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
) -> None:
    """researchquest - research questions that follow your notes."""
    load_env_file()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _print_error(message: str | None, plain: bool) -> None:
    message = escape(message or "unknown error")
    if plain:
        console.print(f"Error: {message}")
    else:
        console.print(f"[red]Error: {message}[/red]")


def _quest_table(title: str, quests: list[QuestInfo], show_document: bool = True) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Question")
    if show_document:
        table.add_column("Document", style="dim")
    table.add_column("Status")

    for quest in quests:
        style = STATUS_STYLES.get(quest.status, "")
        row = [quest.id[:8], escape(quest.question)]
        if show_document:
            row.append(escape(quest.document_id))
        row.append(f"[{style}]{quest.status}[/{style}]" if style else quest.status)
        table.add_row(*row)
    return table


@app.command(name="refresh")
def refresh_cmd(
    path: str = typer.Argument(..., help="Document file to refresh quests for"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    root: str = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory document ids are relative to (default: document_root, else absolute paths)",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Evaluate, validate and top up the quests of one document."""
    if plain:
        result = refresh.refresh(path, data_dir=data_dir, config_path=config_file, root=root)
    else:
        with console.status("Refreshing quests..."):
            result = refresh.refresh(path, data_dir=data_dir, config_path=config_file, root=root)

    if not result.success:
        _print_error(result.error, plain)
        raise typer.Exit(1)

    summary = (
        f"{escape(result.document_id or path)}: {result.completed} completed, "
        f"{result.created} created, {result.obsoleted} obsolete, {result.active_count} active"
    )
    if plain:
        console.print(summary)
        for quest in result.new_quests:
            console.print(f"  + {escape(quest.question)}")
        return

    console.print(f"[green]{summary}[/green]")
    if result.new_quests:
        console.print(_quest_table("New Quests", result.new_quests, show_document=False))


@app.command(name="list")
def list_quests_cmd(
    path: str = typer.Argument(None, help="Only list quests for this document"),
    active: bool = typer.Option(
        False,
        "--active",
        "-a",
        help="Only list active quests",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    root: str = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory document ids are relative to (default: document_root, else absolute paths)",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """List stored quests."""
    result = list_cmd.list_quests(
        path,
        active_only=active,
        data_dir=data_dir,
        config_path=config_file,
        root=root,
    )

    if not result.success:
        _print_error(result.error, plain)
        raise typer.Exit(1)

    if not result.quests:
        if plain:
            console.print("No quests found.")
        else:
            console.print("[dim]No quests found.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Quests ({len(result.quests)}):")
        for quest in result.quests:
            console.print(f"  {quest.id} ({quest.status}) {escape(quest.question)}")
    else:
        console.print(_quest_table(f"Quests ({len(result.quests)})", result.quests))


@app.command(name="dismiss")
def dismiss_cmd(
    quest_id: str = typer.Argument(
        ..., help="Id of the quest to dismiss (a unique prefix is enough)"
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Dismiss a quest so it is no longer active."""
    result = dismiss.dismiss(quest_id, data_dir=data_dir, config_path=config_file)

    if not result.success or result.quest is None:
        _print_error(result.error, plain)
        raise typer.Exit(1)

    if plain:
        console.print(f"Dismissed: {escape(result.quest.question)}")
    else:
        console.print(f"[green]Dismissed:[/green] {escape(result.quest.question)}")


@app.command(name="clear")
def clear_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Remove every stored quest."""

    def cli_confirm(request: ConfirmRequest) -> bool:
        """CLI confirmation callback using typer.confirm."""
        if request.details:
            if plain:
                console.print(request.details)
            else:
                console.print(f"[yellow]{request.details}[/yellow]")
        return typer.confirm(request.message)

    on_confirm = None if yes else cli_confirm

    result = clear.clear(data_dir=data_dir, config_path=config_file, on_confirm=on_confirm)

    if not result.success:
        # Handle cancellation gracefully (exit 0, not error)
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        _print_error(result.error, plain)
        raise typer.Exit(1)

    if plain:
        console.print(f"Removed {result.removed} quests")
    else:
        console.print(f"[green]Removed {result.removed} quests[/green]")


@app.command(name="config")
def config_cmd_handler(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title="researchquest Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("provider", result.provider, "yaml" if result.config_path else "default")

    if result.provider == "litellm":
        table.add_row(
            "llm_model",
            result.llm_model or "(not set)",
            "yaml" if result.llm_model else "env var",
        )

    table.add_row("data_dir", result.data_dir, "yaml" if result.config_path else "default")
    table.add_row("storage_backend", result.storage_backend, "")

    # Separator
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")
