"""
Remote shell module
"""
from .session import build_remote_session_command, open_remote_session

__all__ = ["build_remote_session_command", "open_remote_session"]
