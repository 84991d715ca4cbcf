"""
Interactive action menu
"""
import typer
from rich.markup import escape
from pathlib import Path
from typing import Optional

from ...core.exceptions import ConfigError
from ...core.logging import get_stdout_console
from ...domain.config import find_servers_for_path
from .context import AppContext
from .run import execute_run
from .status import status_text
from .sync import execute_sync, resolve_folder

console = get_stdout_console()

SAFE_SYNC = "Safe Sync"
FULL_SYNC = "Full Sync"
RUN_SESSION = "Run Remote Session"
SELECT_SERVER = "Select Default Server"
RESET_PASSWORDS = "Forget Cached Passwords"
QUIT = "Quit"


def register_menu_command(app: typer.Typer) -> None:
    app.command(name="menu")(menu)


def menu(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Local folder (default: current directory)"),
):
    """
    Interactive menu; server choices and passwords are kept until you quit
    """
    app_ctx: AppContext = ctx.obj
    folder = resolve_folder(path)
    
    while True:
        if app_ctx.settings.show_status:
            try:
                text, tooltip = status_text(app_ctx, folder)
                console.print(f"\n[bold]{text}[/bold]  [dim]{tooltip}[/dim]")
            except ConfigError as e:
                console.print(f"\n[red]Config Error:[/red] {escape(str(e))}")
        
        choice = app_ctx.prompts.choose(
            "WWSync Actions",
            [SAFE_SYNC, FULL_SYNC, RUN_SESSION, SELECT_SERVER, RESET_PASSWORDS, QUIT],
        )
        
        if choice is None or choice == QUIT:
            break
        if choice == SAFE_SYNC:
            execute_sync(app_ctx, folder, mirror=False)
        elif choice == FULL_SYNC:
            execute_sync(app_ctx, folder, mirror=True)
        elif choice == RUN_SESSION:
            execute_run(app_ctx, folder)
        elif choice == SELECT_SERVER:
            select_default_server(app_ctx, folder)
        elif choice == RESET_PASSWORDS:
            app_ctx.session.reset_passwords()
            app_ctx.prompts.info("Cached passwords cleared.")


def select_default_server(app_ctx: AppContext, folder: str) -> None:
    """Pick which of the folder's servers the session uses"""
    try:
        servers = find_servers_for_path(app_ctx.store.load(), folder)
    except ConfigError as e:
        app_ctx.prompts.error(str(e))
        return
    
    if not servers:
        app_ctx.prompts.info("No configured servers for this folder. Add one via a sync command.")
        return
    
    current = app_ctx.session.get(folder)
    labels = {(f"{name} (Selected)" if name == current else name): name for name in servers}
    picked = app_ctx.prompts.choose("Select default server for this folder:", list(labels))
    if picked is not None:
        app_ctx.session.set(folder, labels[picked])
