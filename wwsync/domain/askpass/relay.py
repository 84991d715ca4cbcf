"""
Credential relay - answers ssh password prompts through the UI

ssh runs the SSH_ASKPASS program instead of reading the terminal. The
program generated here posts the prompt text to a local HTTP listener,
which answers from the session cache or by asking the user.
"""
import os
import sys
import tempfile
import threading
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Dict, Optional

from ...core.cancellation import CancellationToken
from ...core.constants import ASKPASS_HOST, ASKPASS_DEFAULT_PROMPT
from ...core.exceptions import AskPassError
from ...core.logging import get_logger
from ..session import SessionState

logger = get_logger(__name__)

AskPassword = Callable[[str], Optional[str]]

CLIENT_SCRIPT = '''\
import sys
import urllib.error
import urllib.request

prompt = " ".join(sys.argv[1:]) or "Password:"
request = urllib.request.Request(
    "http://{host}:{port}/", data=prompt.encode("utf-8"), method="POST"
)
# bypass any http_proxy from the environment, the relay is local
opener = urllib.request.build_opener(urllib.request.ProxyHandler({{}}))
try:
    with opener.open(request) as response:
        sys.stdout.write(response.read().decode("utf-8"))
except (urllib.error.URLError, OSError):
    sys.exit(1)
'''


class _PromptHandler(BaseHTTPRequestHandler):
    """One POST per password prompt; body is the prompt text"""
    
    server: "_RelayServer"
    
    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8", errors="replace")
        prompt = body.strip() or ASKPASS_DEFAULT_PROMPT
        
        password = self.server.relay.answer(prompt)
        if password is None:
            self.send_response(404)
            self.end_headers()
            return
        
        payload = password.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)
    
    def log_message(self, format: str, *args) -> None:
        logger.debug("askpass: " + format % args)


class _RelayServer(ThreadingHTTPServer):
    daemon_threads = True
    
    def __init__(self, relay: "AskPassRelay"):
        super().__init__((ASKPASS_HOST, 0), _PromptHandler)
        self.relay = relay


class AskPassRelay:
    """
    Scoped credential relay.
    
    Usage:
        with AskPassRelay(session, ask_password) as env:
            orchestrator.run_mirroring(target, confirm, env=env)
    
    Entering starts the listener and writes the helper scripts; leaving
    stops the listener and deletes the scripts, on every exit path.
    """
    
    def __init__(
        self,
        session: SessionState,
        ask_password: AskPassword,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """
        Initialize relay.
        
        Args:
            session: Password cache keyed by prompt text
            ask_password: Asks the user, None means dismissed
            cancel_token: Once fired, prompts are answered as dismissed
        """
        self.session = session
        self.ask_password = ask_password
        self.cancel_token = cancel_token
        self._closed = False
        self._server: Optional[_RelayServer] = None
        self._thread: Optional[threading.Thread] = None
        self._prompt_lock = threading.Lock()
        self._client_path: Optional[Path] = None
        self._script_path: Optional[Path] = None
    
    def __enter__(self) -> Dict[str, str]:
        return self.prepare()
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cleanup()
    
    @property
    def port(self) -> Optional[int]:
        return self._server.server_address[1] if self._server else None
    
    def prepare(self) -> Dict[str, str]:
        """
        Start listening and create the askpass scripts.
        
        Returns:
            Environment variables that route ssh prompts to the relay
        
        Raises:
            AskPassError: If the listener or scripts cannot be created
        """
        self._closed = False
        try:
            self._server = _RelayServer(self)
            self._thread = threading.Thread(
                target=self._server.serve_forever,
                daemon=True,
                name=f"AskPassRelay-{self.port}",
            )
            self._thread.start()
            logger.debug(f"AskPass relay listening on {ASKPASS_HOST}:{self.port}")
            
            script = self._create_scripts(self.port)
        except OSError as e:
            self.cleanup()
            raise AskPassError(f"Failed to start askpass relay: {e}") from e
        
        return {
            "SSH_ASKPASS": str(script),
            "SSH_ASKPASS_REQUIRE": "force",
            # ssh only consults SSH_ASKPASS when DISPLAY is set (OpenSSH < 8.4)
            "DISPLAY": "dummy:0",
        }
    
    def answer(self, prompt: str) -> Optional[str]:
        """
        Return cached password for prompt, otherwise ask the user.
        
        Nothing is asked once the relay is closed or the sync cancelled, and
        an answer arriving after that is dropped instead of cached.
        """
        with self._prompt_lock:
            if self._stale():
                return None
            
            cached = self.session.get_password(prompt)
            if cached:
                logger.debug(f"AskPass cache hit for prompt: {prompt}")
                return cached
            
            password = self.ask_password(prompt)
            if self._stale():
                logger.debug(f"Discarding late answer for prompt: {prompt}")
                return None
            if password is not None:
                self.session.set_password(prompt, password)
            return password
    
    def _stale(self) -> bool:
        return self._closed or bool(self.cancel_token and self.cancel_token.is_cancelled)
    
    def _create_scripts(self, port: int) -> Path:
        tmp_dir = Path(tempfile.gettempdir())
        tag = uuid.uuid4().hex[:8]
        
        self._client_path = tmp_dir / f"askpass-client-{tag}.py"
        self._client_path.write_text(
            CLIENT_SCRIPT.format(host=ASKPASS_HOST, port=port),
            encoding="utf-8",
        )
        
        python = sys.executable
        if os.name == "nt":
            self._script_path = tmp_dir / f"askpass-{tag}.bat"
            self._script_path.write_text(
                f'@echo off\n"{python}" "{self._client_path}" %*\n',
                encoding="utf-8",
            )
        else:
            self._script_path = tmp_dir / f"askpass-{tag}.sh"
            self._script_path.write_text(
                f'#!/bin/sh\nexec "{python}" "{self._client_path}" "$@"\n',
                encoding="utf-8",
            )
            self._script_path.chmod(0o755)
        
        return self._script_path
    
    def cleanup(self) -> None:
        """Stop the listener and remove the scripts"""
        self._closed = True
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._thread = None
        
        for path in (self._client_path, self._script_path):
            if path:
                try:
                    path.unlink(missing_ok=True)
                except OSError as e:
                    logger.warning(f"Failed to remove {path}: {e}")
        self._client_path = None
        self._script_path = None
