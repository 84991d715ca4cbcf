"""
Status and server listing commands
"""
import typer
from rich.markup import escape
from pathlib import Path
from typing import Optional, Tuple

from rich.table import Table

from ...core.constants import EXIT_FAILURE
from ...core.exceptions import ConfigError
from ...core.logging import get_stdout_console, get_stderr_console
from ...domain.config import find_servers_for_path
from .context import AppContext
from .sync import resolve_folder

stdout_console = get_stdout_console()
stderr_console = get_stderr_console()


def register_status_commands(app: typer.Typer) -> None:
    app.command(name="status")(status)
    app.command(name="servers")(servers)


def current_server(app_ctx: AppContext, folder: str) -> Optional[str]:
    """
    Server for folder: the session choice, or the only matching server
    (which then becomes the session choice).
    """
    chosen = app_ctx.session.get(folder)
    if chosen:
        return chosen
    
    matches = find_servers_for_path(app_ctx.store.load(), folder)
    if len(matches) == 1:
        app_ctx.session.set(folder, matches[0])
        return matches[0]
    return None


def status_text(app_ctx: AppContext, folder: Optional[str]) -> Tuple[str, str]:
    """(text, tooltip) for the status line"""
    if not folder:
        return "WWSync", "No active folder"
    
    alias = current_server(app_ctx, folder)
    if alias:
        return f"WWSync: {alias}", f"Connected to {alias}"
    return "WWSync", "Run 'wwsync menu' to select a server"


def status(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Local folder (default: current directory)"),
):
    """Show which server the folder syncs to"""
    app_ctx: AppContext = ctx.obj
    try:
        text, tooltip = status_text(app_ctx, resolve_folder(path))
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE)
    
    stdout_console.print(f"[bold]{text}[/bold]  [dim]{tooltip}[/dim]")


def servers(ctx: typer.Context):
    """List configured servers and their mappings"""
    app_ctx: AppContext = ctx.obj
    try:
        config = app_ctx.store.load()
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE)
    
    if not config.servers:
        stdout_console.print(f"[yellow]No servers configured[/yellow] ({app_ctx.store.path})")
        return
    
    table = Table(title="WWSync Servers")
    table.add_column("Alias", style="cyan")
    table.add_column("Host", style="green")
    table.add_column("Shell")
    table.add_column("Local")
    table.add_column("Remote")
    table.add_column("Excludes", style="dim")
    
    for alias, server in config.servers.items():
        shell = server.shell or app_ctx.settings.default_shell
        if not server.mappings:
            table.add_row(alias, server.host, shell, "-", "-", "")
            continue
        for index, mapping in enumerate(server.mappings):
            table.add_row(
                alias if index == 0 else "",
                server.host if index == 0 else "",
                shell if index == 0 else "",
                mapping.local,
                mapping.remote,
                ", ".join(mapping.excludes),
            )
    
    stdout_console.print(table)
