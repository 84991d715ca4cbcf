"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import PromptProvider, OutputSink, NullSink, BufferSink
from .cancellation import CancellationToken
from .utils import (
    ensure_trailing_separator,
    normalize_path,
    list_ssh_hosts,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "PromptProvider",
    "OutputSink",
    "NullSink",
    "BufferSink",
    "CancellationToken",
    "ensure_trailing_separator",
    "normalize_path",
    "list_ssh_hosts",
]
