"""
Deletion-risk analysis of rsync dry-run output
"""
from typing import List

from ...core.constants import DELETION_PREFIX
from .models import TrialResult


def parse_deletions(trial_output: str) -> List[str]:
    """
    Extract the remote-relative paths a dry run would delete.
    
    A line whose stripped form starts with "deleting " is one deletion;
    everything else (progress, transfer listing, summary) is ignored.
    Order is kept and duplicates are not collapsed.
    """
    deletions = []
    for line in trial_output.splitlines():
        stripped = line.strip()
        if stripped.startswith(DELETION_PREFIX):
            deletions.append(stripped[len(DELETION_PREFIX):])
    return deletions


def analyze_trial(trial_output: str) -> TrialResult:
    """Wrap parse_deletions into a TrialResult"""
    return TrialResult(deletions=tuple(parse_deletions(trial_output)))
