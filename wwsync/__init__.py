"""
wwsync - rsync a local project folder to a remote server over ssh

Provides:
- Safe sync (upload, never delete remote files)
- Full sync (mirror with --delete, gated by a dry run and a confirmation)
- Interactive remote shell in the mapped folder
- Session cache of server choices and ssh passwords (askpass relay)
"""

__version__ = "0.1.0"

from .core import CancellationToken
from .domain.sync import (
    SyncTarget,
    CommandSpec,
    ExecutionOutcome,
    Succeeded,
    FailedWithExitCode,
    Cancelled,
    SpawnFailed,
    ProcessRunner,
    SyncOrchestrator,
    SyncService,
    parse_deletions,
    build_rsync_args,
)
from .domain.session import SessionState

__all__ = [
    "__version__",
    "CancellationToken",
    "SyncTarget",
    "CommandSpec",
    "ExecutionOutcome",
    "Succeeded",
    "FailedWithExitCode",
    "Cancelled",
    "SpawnFailed",
    "ProcessRunner",
    "SyncOrchestrator",
    "SyncService",
    "parse_deletions",
    "build_rsync_args",
    "SessionState",
]
