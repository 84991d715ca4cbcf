"""
Main CLI application
"""
import typer
from rich.markup import escape
from pathlib import Path
from typing import Optional

from ...core.exceptions import ConfigError
from ...core.logging import setup_logging, get_logger, get_stderr_console
from ..config.loader import ConfigLoader
from .context import AppContext
from .menu import register_menu_command
from .run import register_run_command
from .status import register_status_commands
from .sync import register_sync_commands

logger = get_logger(__name__)
stderr_console = get_stderr_console()

app = typer.Typer(
    name="wwsync",
    add_completion=False,
    help="Sync project folders to remote servers with rsync over ssh",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_sync_commands(app)
register_run_command(app)
register_status_commands(app)
register_menu_command(app)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings",
        help="Settings file (TOML, default: ~/.config/wwsync/settings.toml)",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Server configuration file (default: ~/.wwsync)",
    ),
):
    """
    WWSync - rsync a local project folder to a configured server
    
    - safe-sync: upload without deleting remote files
    - full-sync: mirror, after confirming remote deletions
    - run: open a shell in the remote folder
    - status / servers / menu
    """
    setup_logging(level=log_level, log_file=log_file)
    
    try:
        settings = ConfigLoader().load(
            toml_path=settings_file,
            cli_overrides={"config_path": str(config_path) if config_path else None},
        )
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    
    logger.debug(f"Settings: {settings}")
    ctx.obj = AppContext(settings=settings)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
