"""
Interactive shell on the remote side of a mapping
"""
import shlex
import subprocess
from typing import List

from ...core.constants import DEFAULT_SSH, DEFAULT_SHELL
from ...core.exceptions import RemoteSessionError
from ...core.logging import get_logger

logger = get_logger(__name__)


def build_remote_session_command(
    host: str,
    remote_path: str,
    shell: str = DEFAULT_SHELL,
    ssh: str = DEFAULT_SSH,
) -> List[str]:
    """ssh -t HOST 'cd REMOTE && exec SHELL'"""
    remote_cmd = f"cd {shlex.quote(remote_path)} && exec {shell}"
    return [ssh, "-t", host, remote_cmd]


def open_remote_session(
    host: str,
    remote_path: str,
    shell: str = DEFAULT_SHELL,
    ssh: str = DEFAULT_SSH,
) -> int:
    """
    Run an interactive ssh session attached to the current terminal.
    
    Returns:
        ssh exit code
    
    Raises:
        RemoteSessionError: If ssh cannot be started
    """
    cmd = build_remote_session_command(host, remote_path, shell, ssh)
    logger.debug(f"Opening remote session: {cmd}")
    
    try:
        return subprocess.call(cmd)
    except OSError as e:
        raise RemoteSessionError(f"Failed to start {ssh}: {e}") from e
