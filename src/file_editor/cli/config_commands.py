"""Configuration management commands for file-editor CLI."""

from pathlib import Path

import typer
from rich.prompt import Confirm, Prompt
from rich.table import Table

from file_editor.cli.constants import ExitCodes
from file_editor.cli.utils import format_bytes, get_console
from file_editor.config import (
    ConfigurationError,
    FileEditorSettings,
    get_config_path,
    load_settings,
    save_config,
)
from file_editor.config.schema import VALID_LOG_LEVELS

console = get_console()


def config_init(config_path: Path | None = None, use_defaults: bool = False) -> None:
    """Initialize configuration with interactive prompts.

    Creates ~/.file-editor/settings.json with guided setup.

    Args:
        config_path: Where to write the file. Defaults to ~/.file-editor/settings.json
        use_defaults: Write default settings without prompting
    """
    console.print("\n[bold cyan]File Editor Configuration Setup[/bold cyan]")

    if config_path is None:
        config_path = get_config_path()

    if config_path.exists() and not use_defaults:
        console.print(f"[yellow]Configuration file already exists at {config_path}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("[dim]Configuration unchanged.[/dim]")
            return

    settings = FileEditorSettings()

    if not use_defaults:
        workspace = Prompt.ask(
            "\nRestrict tools to a workspace directory? (leave empty for no restriction)",
            default="",
        )
        writes_enabled = Confirm.ask("Enable editing tools?", default=True)
        log_level = Prompt.ask(
            "Log level", choices=sorted(VALID_LOG_LEVELS), default=settings.logging.level
        )

        try:
            settings = FileEditorSettings(
                filesystem={
                    "workspace_root": workspace or None,
                    "writes_enabled": writes_enabled,
                },
                logging={"level": log_level},
            )
        except ValueError as e:
            console.print(f"[red]✗[/red] Invalid configuration: {e}")
            raise typer.Exit(ExitCodes.GENERAL_ERROR)

    try:
        save_config(settings, config_path)
    except ConfigurationError as e:
        console.print(f"\n[red]✗[/red] Failed to save configuration: {e}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    console.print(f"\n[green]✓[/green] Configuration saved to {config_path}")


def config_show(config_path: Path | None = None) -> None:
    """Display current effective configuration (file plus environment overrides)."""
    if config_path is None:
        config_path = get_config_path()

    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    if not config_path.exists():
        console.print(
            f"[yellow]No configuration file at {config_path}[/yellow]\n"
            "[dim]Showing defaults and environment overrides. "
            "Run 'file-editor config init' to create one.[/dim]\n"
        )

    table = Table(title="File Editor Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Server Name", settings.server.name)
    table.add_row("Transport", settings.server.transport)
    table.add_row("Workspace Root", str(settings.workspace_root or "Unrestricted"))
    table.add_row("Writes", "Enabled" if settings.writes_enabled else "Disabled")
    table.add_row("Max Read Size", format_bytes(settings.max_read_bytes))
    table.add_row("Log Level", settings.logging.level.upper())
    table.add_row("Log File", str(settings.log_file))

    console.print(table)
    console.print(f"\n[dim]Configuration file: {config_path}[/dim]")
