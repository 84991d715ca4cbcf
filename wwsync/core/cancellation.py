"""
Cancellation token shared by the process runner and the orchestrator
"""
import threading
from typing import Callable, List

from .logging import get_logger

logger = get_logger(__name__)


class CancellationToken:
    """
    One-shot cancellation signal.
    
    Callbacks registered before cancellation run once, on the thread that
    calls cancel(). Registering after cancellation runs the callback
    immediately. cancel() may be called from a signal handler.
    """
    
    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.RLock()
        self._callbacks: List[Callable[[], None]] = []
    
    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
    
    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = self._callbacks[:]
            self._callbacks.clear()
        
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.warning(f"Cancellation callback failed: {e}")
    
    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Subscribe to cancellation.
        
        Returns:
            Function that detaches the callback
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        
        callback()
        return lambda: None
    
    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or timeout elapses"""
        return self._event.wait(timeout)
    
    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
