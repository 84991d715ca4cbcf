"""
Unified exception definitions
"""


class WWSyncError(Exception):
    """Base exception class"""
    pass


class ConfigError(WWSyncError):
    """Configuration error"""
    pass


class SyncError(WWSyncError):
    """Sync error"""
    pass


class AskPassError(WWSyncError):
    """Credential relay error"""
    pass


class RemoteSessionError(WWSyncError):
    """Remote shell session error"""
    pass
