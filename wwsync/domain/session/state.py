"""
Session-scoped server choice and password cache
"""
import threading
from typing import Callable, Dict, List, Optional

from ...core.logging import get_logger

logger = get_logger(__name__)


class SessionState:
    """
    Explicit session context passed to every entry point.
    
    Holds:
    - server alias chosen per local folder
    - password answered per prompt text (credential relay)
    
    Lives as long as its owner (one CLI invocation or one menu session) and
    is only cleared through reset()/reset_passwords().
    """
    
    def __init__(self):
        self._server_choice: Dict[str, str] = {}
        self._passwords: Dict[str, str] = {}
        self._listeners: List[Callable[[], None]] = []
        self._lock = threading.Lock()
    
    # --------------------
    # Server choice
    # --------------------
    def get(self, path: str) -> Optional[str]:
        with self._lock:
            return self._server_choice.get(path)
    
    def set(self, path: str, alias: str) -> None:
        with self._lock:
            if self._server_choice.get(path) == alias:
                return
            self._server_choice[path] = alias
            listeners = self._listeners[:]
        
        logger.debug(f"Session server for {path}: {alias}")
        for listener in listeners:
            listener()
    
    def on_change(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Subscribe to server choice changes, returns unsubscribe function"""
        with self._lock:
            self._listeners.append(listener)
        return lambda: self._remove_listener(listener)
    
    def _remove_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
    
    # --------------------
    # Passwords
    # --------------------
    def get_password(self, prompt: str) -> Optional[str]:
        with self._lock:
            return self._passwords.get(prompt)
    
    def set_password(self, prompt: str, password: str) -> None:
        with self._lock:
            self._passwords[prompt] = password
    
    def reset_passwords(self) -> None:
        with self._lock:
            self._passwords.clear()
    
    def reset(self) -> None:
        """Forget everything (session boundary)"""
        with self._lock:
            self._server_choice.clear()
            self._passwords.clear()
            listeners = self._listeners[:]
        
        for listener in listeners:
            listener()
