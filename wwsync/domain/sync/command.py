"""
Rsync argument vector construction
"""
from typing import List

from ...core.constants import (
    DEFAULT_RSYNC,
    RSYNC_BASE_FLAGS,
    RSYNC_EXCLUDE,
    RSYNC_DELETE,
    RSYNC_DRY_RUN,
)
from ...core.utils import ensure_trailing_separator
from .models import SyncTarget, CommandSpec


def build_rsync_args(target: SyncTarget, mirror: bool, dry_run: bool = False) -> List[str]:
    """
    Build the rsync argument vector for a target.
    
    Layout: -avzP [--exclude PATTERN]* [--delete] [--dry-run] SRC/ HOST:REMOTE
    
    Exclude patterns are passed through untouched; rsync interprets them.
    """
    args = [RSYNC_BASE_FLAGS]
    
    for pattern in target.exclude_patterns:
        args.extend([RSYNC_EXCLUDE, pattern])
    
    if mirror:
        args.append(RSYNC_DELETE)
    
    if dry_run:
        args.append(RSYNC_DRY_RUN)
    
    args.append(ensure_trailing_separator(target.local_root))
    args.append(target.destination)
    return args


def build_command(
    target: SyncTarget,
    mirror: bool,
    dry_run: bool = False,
    executable: str = DEFAULT_RSYNC,
) -> CommandSpec:
    """Build a CommandSpec with a description used in failure messages"""
    if dry_run:
        description = "Dry run"
    elif mirror:
        description = "Full sync"
    else:
        description = "Safe sync"
    
    return CommandSpec(
        executable=executable,
        arguments=tuple(build_rsync_args(target, mirror, dry_run)),
        description=description,
    )
