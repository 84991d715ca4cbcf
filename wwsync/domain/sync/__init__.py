"""
Sync domain module
"""
from .models import (
    SyncTarget,
    CommandSpec,
    TrialResult,
    SyncPhase,
    ExecutionOutcome,
    Succeeded,
    FailedWithExitCode,
    Cancelled,
    SpawnFailed,
    RunResult,
)
from .command import build_rsync_args, build_command
from .deletions import parse_deletions, analyze_trial
from .runner import ProcessRunner
from .orchestrator import SyncOrchestrator, ConfirmCallback
from .service import SyncService, ResolvedTarget

__all__ = [
    "SyncTarget",
    "CommandSpec",
    "TrialResult",
    "SyncPhase",
    "ExecutionOutcome",
    "Succeeded",
    "FailedWithExitCode",
    "Cancelled",
    "SpawnFailed",
    "RunResult",
    "build_rsync_args",
    "build_command",
    "parse_deletions",
    "analyze_trial",
    "ProcessRunner",
    "SyncOrchestrator",
    "ConfirmCallback",
    "SyncService",
    "ResolvedTarget",
]
