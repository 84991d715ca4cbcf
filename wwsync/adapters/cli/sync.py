"""
Sync CLI commands
"""
import typer
from rich.markup import escape
from pathlib import Path
from typing import Optional, Sequence

from ...core.cancellation import CancellationToken
from ...core.constants import EXIT_OK, EXIT_FAILURE, EXIT_CANCELLED
from ...core.exceptions import WWSyncError, ConfigError
from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...domain.sync import (
    ExecutionOutcome,
    Succeeded,
    FailedWithExitCode,
    Cancelled,
    SpawnFailed,
)
from .context import AppContext
from .interrupt import InterruptBridge

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()


def register_sync_commands(app: typer.Typer) -> None:
    """Register safe-sync and full-sync on the main app"""
    app.command(name="safe-sync")(safe_sync)
    app.command(name="full-sync")(full_sync)


def safe_sync(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Local folder (default: current directory)"),
):
    """
    Upload local changes without deleting anything on the server
    
    Examples:
        wwsync safe-sync
        wwsync safe-sync ~/projects/site
    """
    raise typer.Exit(execute_sync(ctx.obj, resolve_folder(path), mirror=False))


def full_sync(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Local folder (default: current directory)"),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Delete remote files missing locally without asking"
    ),
):
    """
    Mirror the local folder: remote files missing locally are deleted
    
    A dry run lists the files that would be deleted and asks before
    touching anything.
    
    Examples:
        wwsync full-sync
        wwsync full-sync ~/projects/site --yes
    """
    raise typer.Exit(execute_sync(ctx.obj, resolve_folder(path), mirror=True, assume_yes=yes))


def resolve_folder(path: Optional[Path]) -> str:
    """Absolute local folder for a command, current directory by default"""
    folder = (path or Path.cwd()).expanduser().resolve()
    if not folder.is_dir():
        stderr_console.print(f"[red]Error:[/red] Not a directory: {folder}")
        raise typer.Exit(EXIT_FAILURE)
    return str(folder)


def execute_sync(app_ctx: AppContext, folder: str, mirror: bool, assume_yes: bool = False) -> int:
    """
    Run one safe or full sync and report it.
    
    Returns:
        Process exit code
    """
    operation = "Full sync" if mirror else "Safe sync"
    token = CancellationToken()
    
    try:
        with InterruptBridge(token) as bridge:
            prompts = bridge.prompts(app_ctx.prompts)
            
            def confirm(deletions: Sequence[str]) -> bool:
                if assume_yes:
                    return True
                return prompts.confirm(
                    f"{len(deletions)} file(s) will be DELETED on the server "
                    f"(see the list above). Continue?",
                    default=False,
                )
            
            service = app_ctx.sync_service(prompts)
            outcome = service.sync(folder, mirror, confirm=confirm, cancel_token=token)
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE
    except WWSyncError as e:
        stderr_console.print(f"[red]WWSync Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE
    except Exception as e:
        logger.exception(f"{operation} failed")
        stderr_console.print(f"[red]Error:[/red] {operation} failed: {escape(str(e))}")
        return EXIT_FAILURE
    
    if outcome is None and token.is_cancelled:
        # Ctrl-C while choosing the server or mapping
        outcome = Cancelled()
    return report_outcome(operation, outcome)


def report_outcome(operation: str, outcome: Optional[ExecutionOutcome]) -> int:
    """Print a one-line summary and map the outcome to an exit code"""
    if outcome is None:
        # user aborted server/mapping selection
        return EXIT_OK
    
    if isinstance(outcome, Succeeded):
        stdout_console.print(f"[green]✓[/green] {operation} completed successfully.")
        return EXIT_OK
    
    if isinstance(outcome, Cancelled):
        if outcome.declined:
            stdout_console.print(f"[cyan]ℹ[/cyan] {operation} cancelled.")
            return EXIT_OK
        stdout_console.print(f"[yellow]⚠[/yellow] {operation} cancelled by user.")
        return EXIT_CANCELLED
    
    if isinstance(outcome, FailedWithExitCode):
        stderr_console.print(f"[red]✗[/red] {operation} failed (exit code {outcome.code}).")
        stderr_console.print(outcome.detail, markup=False, highlight=False)
        return EXIT_FAILURE
    
    if isinstance(outcome, SpawnFailed):
        stderr_console.print(f"[red]WWSync Error:[/red] {escape(outcome.message)}", highlight=False)
        return EXIT_FAILURE
    
    raise ValueError(f"Unknown outcome: {outcome!r}")
