"""
Sync domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class SyncTarget:
    """One sync relationship: local directory -> host:remote directory"""
    local_root: str
    remote_root: str
    host: str
    exclude_patterns: Tuple[str, ...] = ()
    
    def __post_init__(self):
        # Freeze list input so the target cannot change mid-invocation
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))
    
    @property
    def destination(self) -> str:
        return f"{self.host}:{self.remote_root}"


@dataclass(frozen=True)
class CommandSpec:
    """Executable plus argument vector, built fresh per invocation"""
    executable: str
    arguments: Tuple[str, ...]
    description: str = "rsync"
    
    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]
    
    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class TrialResult:
    """Paths a dry run reported it would delete on the remote side"""
    deletions: Tuple[str, ...] = ()
    
    @property
    def is_destructive(self) -> bool:
        return bool(self.deletions)


class SyncPhase(str, Enum):
    """Orchestrator states"""
    IDLE = "idle"
    BUILDING_COMMAND = "building_command"
    TRIAL_RUNNING = "trial_running"
    GATING = "gating"
    RUNNING = "running"
    DONE = "done"


# ============================================================
# Execution Outcomes
# ============================================================

@dataclass(frozen=True)
class ExecutionOutcome:
    """Terminal value of one process run or one sync invocation"""
    
    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Succeeded(ExecutionOutcome):
    
    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FailedWithExitCode(ExecutionOutcome):
    code: int
    detail: str = ""


@dataclass(frozen=True)
class Cancelled(ExecutionOutcome):
    """
    Aborted without error.
    
    declined is True when the user refused the destructive confirmation,
    False when the cancellation token fired.
    """
    declined: bool = False


@dataclass(frozen=True)
class SpawnFailed(ExecutionOutcome):
    message: str


@dataclass(frozen=True)
class RunResult:
    """Outcome of one spawn plus whatever output was captured"""
    outcome: ExecutionOutcome
    stdout: str = ""
    stderr: str = ""
