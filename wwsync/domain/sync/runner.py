"""
Process runner - spawns one external command and reports its outcome
"""
import codecs
import os
import subprocess
import threading
import time
from typing import Optional, Mapping, IO, List

from ...core.cancellation import CancellationToken
from ...core.constants import READ_CHUNK_SIZE, TERMINATE_GRACE_SECONDS, WAIT_POLL_SECONDS
from ...core.interfaces import OutputSink, NullSink
from ...core.logging import get_logger
from .models import (
    CommandSpec,
    RunResult,
    Succeeded,
    FailedWithExitCode,
    Cancelled,
    SpawnFailed,
)

logger = get_logger(__name__)


class ProcessRunner:
    """
    Runs a CommandSpec as a child process.
    
    Two modes:
    - capture_only=True: stdout is buffered and returned, nothing is shown live
    - capture_only=False: stdout and stderr are streamed to the sink as they arrive
    
    stderr is always accumulated so a failure can carry its diagnostic text.
    Each execute() call owns its own process, reader threads and cancellation
    subscription; concurrent calls are independent.
    """
    
    def __init__(self, sink: Optional[OutputSink] = None):
        """
        Initialize process runner.
        
        Args:
            sink: Destination for live output (discarded if omitted)
        """
        self.sink = sink or NullSink()
        self._sink_lock = threading.Lock()
    
    def execute(
        self,
        spec: CommandSpec,
        capture_only: bool = False,
        cancel_token: Optional[CancellationToken] = None,
        extra_env: Optional[Mapping[str, str]] = None,
    ) -> RunResult:
        """
        Spawn the command and wait for it.
        
        Args:
            spec: Command to run
            capture_only: Buffer stdout instead of streaming it
            cancel_token: Kills the process when signalled
            extra_env: Variables merged over the inherited environment
        
        Returns:
            RunResult with the outcome and captured stdout/stderr
        """
        env = dict(os.environ)
        if extra_env:
            env.update(extra_env)
        
        logger.debug(f"Spawning: {spec.display()}")
        
        try:
            proc = subprocess.Popen(
                spec.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=env,
            )
        except OSError as e:
            logger.error(f"Failed to start {spec.executable}: {e}")
            return RunResult(outcome=SpawnFailed(message=str(e)))
        
        stdout_chunks: List[str] = []
        stderr_chunks: List[str] = []
        cancelled = threading.Event()
        
        def _terminate() -> None:
            cancelled.set()
            if proc.poll() is None:
                logger.debug(f"Terminating {spec.executable} (pid {proc.pid})")
                try:
                    proc.terminate()
                except OSError:
                    pass
        
        readers = [
            self._start_reader(proc.stdout, stdout_chunks, stream_live=not capture_only),
            self._start_reader(proc.stderr, stderr_chunks, stream_live=not capture_only),
        ]
        
        detach = cancel_token.register(_terminate) if cancel_token else (lambda: None)
        try:
            code = self._wait(proc, cancelled)
            for reader in readers:
                # a grandchild (ssh) may hold the pipe open after rsync is killed
                reader.join(timeout=TERMINATE_GRACE_SECONDS if cancelled.is_set() else None)
        finally:
            detach()
            for pipe in (proc.stdout, proc.stderr):
                if pipe:
                    pipe.close()
        
        stdout = "".join(stdout_chunks)
        stderr = "".join(stderr_chunks)
        
        if cancelled.is_set():
            logger.debug(f"{spec.description} cancelled (exit code {code} ignored)")
            return RunResult(outcome=Cancelled(), stdout=stdout, stderr=stderr)
        
        if code == 0:
            return RunResult(outcome=Succeeded(), stdout=stdout, stderr=stderr)
        
        detail = stderr.strip() or f"{spec.description} failed with code {code}"
        logger.debug(f"{spec.description} exited with code {code}")
        return RunResult(
            outcome=FailedWithExitCode(code=code, detail=detail),
            stdout=stdout,
            stderr=stderr,
        )
    
    def _wait(self, proc: subprocess.Popen, cancelled: threading.Event) -> int:
        """Wait for exit; escalate to kill if a terminated process lingers"""
        deadline = None
        while True:
            try:
                return proc.wait(timeout=WAIT_POLL_SECONDS)
            except subprocess.TimeoutExpired:
                if not cancelled.is_set():
                    continue
                if deadline is None:
                    deadline = time.monotonic() + TERMINATE_GRACE_SECONDS
                elif time.monotonic() >= deadline:
                    logger.warning(f"Process {proc.pid} ignored SIGTERM, killing")
                    proc.kill()
    
    def _start_reader(self, pipe: IO[bytes], chunks: List[str], stream_live: bool) -> threading.Thread:
        thread = threading.Thread(
            target=self._pump,
            args=(pipe, chunks, stream_live),
            daemon=True,
            name=f"ProcessRunner-Reader-{id(pipe)}",
        )
        thread.start()
        return thread
    
    def _pump(self, pipe: IO[bytes], chunks: List[str], stream_live: bool) -> None:
        """Read a pipe until EOF, forwarding decoded text as it arrives"""
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            try:
                data = pipe.read1(READ_CHUNK_SIZE)
            except (OSError, ValueError):
                # pipe closed under us after an abandoned join
                break
            text = decoder.decode(data, final=not data)
            if text:
                chunks.append(text)
                if stream_live:
                    with self._sink_lock:
                        self.sink.write(text)
            if not data:
                break
