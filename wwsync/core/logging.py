"""
Rich-based logging system
"""
import logging
from typing import Optional
from pathlib import Path

import click
import typer
from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback


# User-facing output and rsync's stream go to stdout; logs and errors to
# stderr so they never interleave with the transfer output. Both resolve
# sys.stdout/sys.stderr at write time.
_stdout_console = Console()
_stderr_console = Console(stderr=True)

install_traceback(console=_stderr_console, show_locals=False, width=120, suppress=[click, typer])

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("paramiko",)

FILE_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    rich_tracebacks: bool = True,
) -> None:
    """
    Setup Rich logging system.
    
    Records from rsync reader threads and askpass handler threads carry
    their thread name in the log file.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        rich_tracebacks: Enable rich tracebacks
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    debug = log_level <= logging.DEBUG
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    
    rich_handler = RichHandler(
        console=_stderr_console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=rich_tracebacks,
        tracebacks_suppress=[click, typer],
        markup=False,
        show_level=True,
    )
    rich_handler.setLevel(log_level)
    root_logger.addHandler(rich_handler)
    
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)
    
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(log_level if debug else max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for user-facing output (prompts, status, rsync stream)"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and logs"""
    return _stderr_console
