"""CLI entry point for File Editor."""

import inspect
import logging
from pathlib import Path

import typer

from file_editor import __version__
from file_editor.cli.constants import ExitCodes
from file_editor.cli.utils import format_bytes, get_console
from file_editor.config import ConfigurationError, load_settings

app = typer.Typer(help="File Editor - line-anchored file editing tools over MCP")

console = get_console()

logger = logging.getLogger(__name__)

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Path to settings.json (default: ~/.file-editor/settings.json)"
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    """File Editor - MCP server for reading, searching and editing text files.

    \b
    Examples:
        file-editor serve                 # Run the MCP server on stdio
        file-editor tools                 # List the tools the server exposes
        file-editor config show           # Show effective configuration
        file-editor config init           # Create ~/.file-editor/settings.json
    """
    if version_flag:
        console.print(f"File Editor version {__version__}")
        raise typer.Exit(ExitCodes.SUCCESS)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command("serve")
def serve_command(
    config: Path = CONFIG_OPTION,
    workspace: Path = typer.Option(
        None, "--workspace", "-w", help="Restrict tools to paths under this directory"
    ),
    read_only: bool = typer.Option(False, "--read-only", help="Disable the editing tools"),
) -> None:
    """Run the MCP server over stdio.

    Log output goes to the log file; stdout is reserved for the protocol.
    """
    from file_editor.logging_setup import setup_logging
    from file_editor.server import run_server

    err_console = get_console(stderr=True)

    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        err_console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    if workspace is not None:
        settings.filesystem.workspace_root = workspace.expanduser().resolve()
    if read_only:
        settings.filesystem.writes_enabled = False

    log_file = setup_logging(settings)
    logger.info(f"Starting File Editor {__version__}")

    try:
        run_server(settings)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        raise typer.Exit(ExitCodes.INTERRUPTED)
    except Exception as e:
        logger.exception("Server stopped with an error")
        err_console.print(f"[red]Server error:[/red] {e} [dim](see {log_file})[/dim]")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)


@app.command("tools")
def tools_command(config: Path = CONFIG_OPTION) -> None:
    """Show the tools exposed by the server, grouped by toolset."""
    from file_editor.server import get_toolsets

    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    workspace = settings.workspace_root or "Unrestricted"
    write_status = (
        "[green]Enabled[/green]" if settings.writes_enabled else "[yellow]Disabled[/yellow]"
    )

    console.print()
    console.print(f"[cyan]◉[/cyan] Workspace: [cyan]{workspace}[/cyan]")
    console.print(
        f"[cyan]◉[/cyan] Writes: {write_status} · Read: "
        f"[dim]{format_bytes(settings.max_read_bytes)}[/dim]"
    )

    for toolset in get_toolsets(settings):
        tools = toolset.get_tools()
        console.print()
        console.print(f"● [bold]{type(toolset).__name__}[/bold] · {len(tools)} tools")
        for tool in tools:
            summary = inspect.getdoc(tool).splitlines()[0] if tool.__doc__ else ""
            console.print(f"  [dim]• {tool.__name__}[/dim] {summary}")


config_app = typer.Typer(help="Manage file editor configuration")
app.add_typer(config_app, name="config")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    """Config command callback - shows help if no subcommand given."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@config_app.command("init")
def config_init_command(
    config: Path = CONFIG_OPTION,
    defaults: bool = typer.Option(False, "--defaults", help="Write defaults without prompting"),
) -> None:
    """Initialize configuration with interactive prompts."""
    from file_editor.cli.config_commands import config_init

    config_init(config, use_defaults=defaults)


@config_app.command("show")
def config_show_command(config: Path = CONFIG_OPTION) -> None:
    """Display current configuration."""
    from file_editor.cli.config_commands import config_show

    config_show(config)


if __name__ == "__main__":
    app()
