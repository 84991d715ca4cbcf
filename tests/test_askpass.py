"""Tests for the credential relay."""

import os
import subprocess
import threading
import urllib.error
import urllib.request
from pathlib import Path

import pytest

from wwsync.core.cancellation import CancellationToken
from wwsync.domain.askpass import AskPassRelay
from wwsync.domain.session import SessionState


def post(port: int, body: bytes) -> bytes:
    opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
    request = urllib.request.Request(f"http://127.0.0.1:{port}/", data=body, method="POST")
    with opener.open(request, timeout=10) as response:
        return response.read()


@pytest.fixture
def session():
    return SessionState()


class TestAskPassRelay:

    def test_environment(self, session):
        with AskPassRelay(session, lambda prompt: "x") as env:
            assert env["SSH_ASKPASS_REQUIRE"] == "force"
            assert env["DISPLAY"] == "dummy:0"
            assert Path(env["SSH_ASKPASS"]).exists()

    def test_answers_and_caches(self, session):
        asked = []

        def ask(prompt):
            asked.append(prompt)
            return "secret"

        relay = AskPassRelay(session, ask)
        with relay:
            assert post(relay.port, b"deploy@host's password: ") == b"secret"
            assert post(relay.port, b"deploy@host's password: ") == b"secret"

        assert asked == ["deploy@host's password:"]
        assert session.get_password("deploy@host's password:") == "secret"

    def test_uses_existing_session_password(self, session):
        session.set_password("Password required:", "cached")
        relay = AskPassRelay(session, lambda prompt: pytest.fail("should not ask"))
        with relay:
            assert post(relay.port, b"   ") == b"cached"

    def test_dismissed_prompt_returns_404(self, session):
        relay = AskPassRelay(session, lambda prompt: None)
        with relay:
            with pytest.raises(urllib.error.HTTPError) as excinfo:
                post(relay.port, b"Password:")
        assert excinfo.value.code == 404
        assert session.get_password("Password:") is None

    def test_cleanup_removes_scripts_and_stops_server(self, session):
        relay = AskPassRelay(session, lambda prompt: "x")
        env = relay.prepare()
        script = Path(env["SSH_ASKPASS"])
        port = relay.port

        relay.cleanup()

        assert not script.exists()
        assert relay.port is None
        with pytest.raises(OSError):
            post(port, b"Password:")

    def test_cleanup_on_error(self, session):
        relay = AskPassRelay(session, lambda prompt: "x")
        with pytest.raises(RuntimeError):
            with relay as env:
                script = Path(env["SSH_ASKPASS"])
                raise RuntimeError("sync blew up")
        assert not script.exists()

    def test_answer_after_cleanup_not_cached(self, session):
        asking = threading.Event()
        release = threading.Event()

        def ask(prompt):
            asking.set()
            release.wait(10)
            return "typed too late"

        relay = AskPassRelay(session, ask)
        relay.prepare()
        answers = []
        thread = threading.Thread(target=lambda: answers.append(relay.answer("Password:")))
        thread.start()
        assert asking.wait(10)

        relay.cleanup()
        release.set()
        thread.join(10)

        assert answers == [None]
        assert session.get_password("Password:") is None

    def test_closed_relay_does_not_ask(self, session):
        relay = AskPassRelay(session, lambda prompt: pytest.fail("should not ask"))
        relay.prepare()
        relay.cleanup()
        assert relay.answer("Password:") is None

    def test_cancelled_sync_does_not_ask(self, session):
        token = CancellationToken()
        relay = AskPassRelay(session, lambda prompt: pytest.fail("should not ask"), token)
        with relay:
            token.cancel()
            with pytest.raises(urllib.error.HTTPError) as excinfo:
                post(relay.port, b"Password:")
        assert excinfo.value.code == 404

    def test_answer_given_after_cancel_not_cached(self, session):
        token = CancellationToken()

        def ask(prompt):
            token.cancel()
            return "secret"

        relay = AskPassRelay(session, ask, token)
        assert relay.answer("Password:") is None
        assert session.get_password("Password:") is None

    @pytest.mark.skipif(os.name == "nt", reason="POSIX wrapper script")
    def test_wrapper_script_end_to_end(self, session):
        with AskPassRelay(session, lambda prompt: f"answer to {prompt}") as env:
            result = subprocess.run(
                [env["SSH_ASKPASS"], "Enter", "passphrase:"],
                capture_output=True,
                text=True,
                timeout=30,
            )
        assert result.returncode == 0
        assert result.stdout == "answer to Enter passphrase:"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX wrapper script")
    def test_wrapper_script_exits_nonzero_when_dismissed(self, session):
        with AskPassRelay(session, lambda prompt: None) as env:
            result = subprocess.run([env["SSH_ASKPASS"]], capture_output=True, timeout=30)
        assert result.returncode == 1
        assert result.stdout == b""
