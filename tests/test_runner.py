"""Tests for the process runner, using the current interpreter as child."""

import sys
import threading
import time

import pytest

from wwsync.core.cancellation import CancellationToken
from wwsync.core.interfaces import BufferSink
from wwsync.domain.sync import (
    Cancelled,
    CommandSpec,
    FailedWithExitCode,
    ProcessRunner,
    SpawnFailed,
    Succeeded,
)


def python(code: str, description: str = "Test command") -> CommandSpec:
    return CommandSpec(executable=sys.executable, arguments=("-c", code), description=description)


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture
def runner(sink):
    return ProcessRunner(sink)


class TestOutcomes:
    """Exit code to outcome mapping."""

    def test_success(self, runner):
        result = runner.execute(python("pass"))
        assert result.outcome == Succeeded()
        assert result.outcome.ok

    def test_failure_carries_stderr(self, runner):
        code = "import sys; sys.stderr.write('rsync: connection unexpectedly closed'); sys.exit(12)"
        result = runner.execute(python(code))
        assert result.outcome == FailedWithExitCode(
            code=12, detail="rsync: connection unexpectedly closed"
        )

    def test_failure_without_stderr_synthesizes_message(self, runner):
        result = runner.execute(python("import sys; sys.exit(23)", description="Dry run"))
        assert result.outcome == FailedWithExitCode(code=23, detail="Dry run failed with code 23")

    def test_missing_executable(self, runner):
        spec = CommandSpec(executable="/nonexistent/bin/rsync-missing", arguments=("-avzP",))
        result = runner.execute(spec)
        assert isinstance(result.outcome, SpawnFailed)
        assert result.outcome.message


class TestCaptureAndStreaming:
    """Capture-only versus live output."""

    def test_capture_only_buffers_stdout(self, runner, sink):
        code = "import sys; print('deleting old/file.txt'); sys.stderr.write('warn')"
        result = runner.execute(python(code), capture_only=True)

        assert result.outcome == Succeeded()
        assert result.stdout.splitlines() == ["deleting old/file.txt"]
        assert result.stderr == "warn"
        assert sink.text == ""

    def test_live_streams_both_streams(self, runner, sink):
        code = "import sys; print('to stdout', flush=True); sys.stderr.write('to stderr')"
        result = runner.execute(python(code), capture_only=False)

        assert result.outcome == Succeeded()
        assert "to stdout" in sink.text
        assert "to stderr" in sink.text

    def test_live_failure_still_accumulates_stderr(self, runner, sink):
        code = "import sys; sys.stderr.write('permission denied'); sys.exit(23)"
        result = runner.execute(python(code), capture_only=False)

        assert result.outcome == FailedWithExitCode(code=23, detail="permission denied")
        assert "permission denied" in sink.text

    def test_utf8_output(self, runner):
        code = "import sys; sys.stdout.buffer.write('deleting caf\\u00e9.txt\\n'.encode('utf-8'))"
        result = runner.execute(python(code), capture_only=True)
        assert result.stdout == "deleting café.txt\n"


class TestEnvironment:
    """Extra environment merging."""

    def test_extra_env_is_merged(self, runner, monkeypatch):
        monkeypatch.setenv("WWSYNC_INHERITED", "kept")
        code = "import os; print(os.environ['WWSYNC_INHERITED'], os.environ['SSH_ASKPASS_REQUIRE'])"
        result = runner.execute(
            python(code), capture_only=True, extra_env={"SSH_ASKPASS_REQUIRE": "force"}
        )
        assert result.stdout.split() == ["kept", "force"]

    def test_extra_env_overrides_inherited(self, runner, monkeypatch):
        monkeypatch.setenv("DISPLAY", ":1")
        code = "import os; print(os.environ['DISPLAY'])"
        result = runner.execute(python(code), capture_only=True, extra_env={"DISPLAY": "dummy:0"})
        assert result.stdout.strip() == "dummy:0"


class TestCancellation:
    """Cancellation token handling."""

    def test_cancel_kills_running_process(self, runner):
        token = CancellationToken()
        code = "import time; print('started', flush=True); time.sleep(60)"
        timer = threading.Timer(0.5, token.cancel)
        timer.start()

        started = time.monotonic()
        result = runner.execute(python(code), capture_only=True, cancel_token=token)
        timer.cancel()

        assert result.outcome == Cancelled()
        assert time.monotonic() - started < 30

    def test_already_cancelled_token_terminates_immediately(self, runner):
        token = CancellationToken()
        token.cancel()
        result = runner.execute(python("import time; time.sleep(60)"), cancel_token=token)
        assert result.outcome == Cancelled()

    def test_subscription_released_after_completion(self, runner):
        token = CancellationToken()
        runner.execute(python("pass"), cancel_token=token)
        assert token._callbacks == []

    def test_cancel_after_completion_does_not_change_outcome(self, runner):
        token = CancellationToken()
        result = runner.execute(python("pass"), cancel_token=token)
        token.cancel()
        assert result.outcome == Succeeded()
