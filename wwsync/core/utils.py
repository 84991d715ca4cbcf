"""
Core utility functions
"""
import os
import paramiko
from pathlib import Path
from typing import List


SSH_CONFIG_PATH = "~/.ssh/config"


# ============================================================
# Path Helpers
# ============================================================

def ensure_trailing_separator(path: str) -> str:
    """
    Force exactly one trailing separator onto a local directory path.
    
    rsync copies the contents of a directory when the source ends with a
    separator, and the directory itself otherwise.
    """
    if not path:
        return "./"
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return "/"
    return stripped + "/"


def normalize_path(path: str) -> str:
    """Normalize a local path for comparisons between config entries"""
    return os.path.normpath(path).lower()


# ============================================================
# SSH Config
# ============================================================

def list_ssh_hosts(config_path: str = SSH_CONFIG_PATH) -> List[str]:
    """
    List concrete Host aliases from ~/.ssh/config (wildcards skipped).
    
    Returns an empty list when the file is missing.
    """
    path = Path(config_path).expanduser()
    if not path.exists():
        return []

    ssh_config = paramiko.SSHConfig.from_path(str(path))
    return sorted(
        name for name in ssh_config.get_hostnames()
        if not any(ch in name for ch in "*?!")
    )
