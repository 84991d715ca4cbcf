"""
Ctrl-C to cancellation token bridge
"""
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ...core.cancellation import CancellationToken
from ...core.interfaces import PromptProvider
from ...core.logging import get_logger

logger = get_logger(__name__)


class InterruptBridge:
    """
    While active, SIGINT signals the token instead of raising.
    
    Inside prompting(), SIGINT also raises KeyboardInterrupt so a blocked
    prompt is dismissed; prompts treat that as a refusal.
    """
    
    def __init__(self, token: CancellationToken):
        self.token = token
        self._prompting = False
        self._previous = None
        self._installed = False
    
    def __enter__(self) -> "InterruptBridge":
        # signal handlers can only be installed from the main thread
        if threading.current_thread() is threading.main_thread():
            self._previous = signal.signal(signal.SIGINT, self._handle)
            self._installed = True
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._installed:
            signal.signal(signal.SIGINT, self._previous)
            self._installed = False
    
    @contextmanager
    def prompting(self) -> Iterator[None]:
        # only the main thread receives the KeyboardInterrupt
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        self._prompting = True
        try:
            yield
        finally:
            self._prompting = False
    
    def prompts(self, inner: PromptProvider) -> "InterruptiblePrompts":
        return InterruptiblePrompts(inner, self)
    
    def _handle(self, signum, frame) -> None:
        logger.debug("Interrupt received, cancelling")
        self.token.cancel()
        if self._prompting:
            raise KeyboardInterrupt


class InterruptiblePrompts(PromptProvider):
    """
    PromptProvider whose prompts Ctrl-C dismisses.
    
    Once the token has fired no further question is asked: every prompt
    answers as if dismissed.
    """
    
    def __init__(self, inner: PromptProvider, bridge: InterruptBridge):
        self.inner = inner
        self.bridge = bridge
    
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> Optional[str]:
        if self.bridge.token.is_cancelled:
            return None
        with self.bridge.prompting():
            return self.inner.prompt(message, default=default, password=password)
    
    def confirm(self, message: str, default: bool = False) -> bool:
        if self.bridge.token.is_cancelled:
            return False
        with self.bridge.prompting():
            return self.inner.confirm(message, default=default)
    
    def choose(self, message: str, options: Sequence[str]) -> Optional[str]:
        if self.bridge.token.is_cancelled:
            return None
        with self.bridge.prompting():
            return self.inner.choose(message, options)
    
    def info(self, message: str) -> None:
        self.inner.info(message)
