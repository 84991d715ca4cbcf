"""
Remote session CLI command
"""
import typer
from rich.markup import escape
from pathlib import Path
from typing import Optional

from ...core.constants import EXIT_OK, EXIT_FAILURE
from ...core.exceptions import WWSyncError
from ...core.logging import get_logger, get_stderr_console
from ...domain.shell import open_remote_session
from .context import AppContext
from .sync import resolve_folder

logger = get_logger(__name__)
stderr_console = get_stderr_console()


def register_run_command(app: typer.Typer) -> None:
    app.command(name="run")(run_session)


def run_session(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Local folder (default: current directory)"),
):
    """
    Open a shell on the server in the remote folder mapped to PATH
    
    Uses the server's "shell" setting (default: bash).
    """
    raise typer.Exit(execute_run(ctx.obj, resolve_folder(path)))


def execute_run(app_ctx: AppContext, folder: str) -> int:
    try:
        resolved = app_ctx.sync_service().resolve(folder)
        if resolved is None:
            return EXIT_OK
        
        shell = resolved.server.shell or app_ctx.settings.default_shell
        return open_remote_session(
            resolved.server.host,
            resolved.mapping.remote,
            shell=shell,
            ssh=app_ctx.settings.ssh,
        )
    except WWSyncError as e:
        stderr_console.print(f"[red]WWSync Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE
