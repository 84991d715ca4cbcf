"""
Sync orchestrator - safe sync and gated full (mirroring) sync
"""
from typing import Callable, Mapping, Optional, Sequence

from ...core.cancellation import CancellationToken
from ...core.constants import DEFAULT_RSYNC
from ...core.interfaces import OutputSink, NullSink
from ...core.logging import get_logger
from .command import build_command
from .deletions import analyze_trial
from .models import (
    SyncTarget,
    SyncPhase,
    CommandSpec,
    ExecutionOutcome,
    Succeeded,
    FailedWithExitCode,
    Cancelled,
    SpawnFailed,
)
from .runner import ProcessRunner

logger = get_logger(__name__)

# Receives the paths rsync would delete; only True approves. The orchestrator
# checks the token only after it returns, so a callback that blocks on the user
# must itself give up (return False) when the cancellation token fires.
ConfirmCallback = Callable[[Sequence[str]], bool]

BANNER_RULE = "═" * 59


class SyncOrchestrator:
    """
    Sequences rsync invocations for one sync request.
    
    Safe sync:  build -> run
    Full sync:  build -> dry run -> deletion analysis -> confirmation gate -> run
    
    The real --delete run is only started when the dry run reported no
    deletions or the confirmation callback explicitly approved them.
    No step is retried; the first non-success outcome ends the flow.
    """
    
    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        sink: Optional[OutputSink] = None,
        executable: str = DEFAULT_RSYNC,
        on_phase: Optional[Callable[[SyncPhase], None]] = None,
    ):
        """
        Initialize orchestrator.
        
        Args:
            runner: Process runner (defaults to one streaming into sink)
            sink: Output channel for banners and live output
            executable: rsync binary
            on_phase: Callback on every state transition
        """
        self.sink = sink or NullSink()
        self.runner = runner or ProcessRunner(self.sink)
        self.executable = executable
        self.on_phase = on_phase
    
    # --------------------
    # Entry points
    # --------------------
    def run_non_destructive(
        self,
        target: SyncTarget,
        cancel_token: Optional[CancellationToken] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ExecutionOutcome:
        """Safe sync: files missing locally are never deleted remotely"""
        self._enter(SyncPhase.BUILDING_COMMAND)
        spec = build_command(target, mirror=False, executable=self.executable)
        
        self._banner(
            f">>> Syncing (Safe Mode): {target.local_root} -> {target.destination}",
            "Files missing locally will NOT be deleted on the server.",
        )
        
        if self._cancelled(cancel_token):
            return self._done(Cancelled())
        
        return self._done(self._run_live(spec, cancel_token, env))
    
    def run_mirroring(
        self,
        target: SyncTarget,
        confirm: ConfirmCallback,
        cancel_token: Optional[CancellationToken] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ExecutionOutcome:
        """
        Full sync: remote becomes an exact mirror of the local folder.
        
        Args:
            target: What to sync where
            confirm: Asked with the deletion list when it is non-empty;
                anything but True declines. Must return once cancel_token
                fires; a cancellation seen afterwards wins over the answer
            cancel_token: Aborts at any step
            env: Extra environment for rsync/ssh (credential relay)
        """
        self._enter(SyncPhase.BUILDING_COMMAND)
        trial_spec = build_command(target, mirror=True, dry_run=True, executable=self.executable)
        
        self._banner(
            f">>> Full Sync (Full Mode): {target.local_root} -> {target.destination}",
            "Checking for files to delete on remote...",
        )
        
        if self._cancelled(cancel_token):
            return self._done(Cancelled())
        
        # Dry run
        self._enter(SyncPhase.TRIAL_RUNNING)
        logger.debug(f"Dry run: {trial_spec.display()}")
        trial = self.runner.execute(
            trial_spec,
            capture_only=True,
            cancel_token=cancel_token,
            extra_env=env,
        )
        if not trial.outcome.ok:
            self._report_trial_failure(trial.outcome)
            return self._done(trial.outcome)
        
        deletions = list(analyze_trial(trial.stdout).deletions)
        if self._cancelled(cancel_token):
            return self._done(Cancelled())
        
        # Confirmation gate
        self._enter(SyncPhase.GATING)
        if deletions:
            self.sink.write_line()
            self.sink.write_line("⚠️  WARNING! The following files will be DELETED on the server:")
            for path in deletions:
                self.sink.write_line(f"  - {path}")
            self.sink.write_line()
            self.sink.write_line(f"Total files to delete: {len(deletions)}")
            
            approved = confirm(list(deletions))
            if self._cancelled(cancel_token):
                return self._done(Cancelled())
            if approved is not True:
                self.sink.write_line("Operation cancelled.")
                return self._done(Cancelled(declined=True))
        else:
            self.sink.write_line("✔ No files need to be deleted.")
        
        if self._cancelled(cancel_token):
            return self._done(Cancelled())
        
        spec = build_command(target, mirror=True, executable=self.executable)
        return self._done(self._run_live(spec, cancel_token, env))
    
    # --------------------
    # Helpers
    # --------------------
    def _run_live(
        self,
        spec: CommandSpec,
        cancel_token: Optional[CancellationToken],
        env: Optional[Mapping[str, str]],
    ) -> ExecutionOutcome:
        """Run a mutating command with output streamed to the sink"""
        self._enter(SyncPhase.RUNNING)
        self.sink.write_line(f"Running: {spec.display()}")
        self.sink.write_line()
        
        outcome = self.runner.execute(
            spec,
            capture_only=False,
            cancel_token=cancel_token,
            extra_env=env,
        ).outcome
        
        self.sink.write_line()
        if isinstance(outcome, Succeeded):
            self.sink.write_line(f"✔ {spec.description} completed successfully.")
        elif isinstance(outcome, FailedWithExitCode):
            self.sink.write_line(f"✖ {spec.description} failed with code {outcome.code}.")
        elif isinstance(outcome, Cancelled):
            self.sink.write_line(f"✖ {spec.description} cancelled by user.")
        elif isinstance(outcome, SpawnFailed):
            self.sink.write_line(f"Error: {outcome.message}")
        return outcome
    
    def _report_trial_failure(self, outcome: ExecutionOutcome) -> None:
        if isinstance(outcome, FailedWithExitCode):
            self.sink.write_line(f"Error: {outcome.detail}")
        elif isinstance(outcome, SpawnFailed):
            self.sink.write_line(f"Error: {outcome.message}")
    
    def _banner(self, *lines: str) -> None:
        self.sink.write_line()
        self.sink.write_line(BANNER_RULE)
        for line in lines:
            self.sink.write_line(line)
        self.sink.write_line(BANNER_RULE)
    
    @staticmethod
    def _cancelled(cancel_token: Optional[CancellationToken]) -> bool:
        return cancel_token is not None and cancel_token.is_cancelled
    
    def _enter(self, phase: SyncPhase) -> None:
        logger.debug(f"Sync phase: {phase.value}")
        if self.on_phase:
            self.on_phase(phase)
    
    def _done(self, outcome: ExecutionOutcome) -> ExecutionOutcome:
        self._enter(SyncPhase.DONE)
        logger.debug(f"Sync outcome: {outcome}")
        return outcome
