"""Shared fixtures and test doubles."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import pytest

from wwsync.core.interfaces import PromptProvider
from wwsync.domain.sync.models import CommandSpec, RunResult, SyncTarget


@dataclass
class RunnerCall:
    spec: CommandSpec
    capture_only: bool
    cancel_token: Any
    extra_env: Optional[Dict[str, str]]


class FakeRunner:
    """Process runner double returning scripted results in order."""

    def __init__(self, *results: RunResult):
        self.results = list(results)
        self.calls: List[RunnerCall] = []

    def execute(self, spec, capture_only=False, cancel_token=None, extra_env=None):
        self.calls.append(RunnerCall(spec, capture_only, cancel_token, extra_env))
        if not self.results:
            raise AssertionError(f"Unexpected spawn: {spec.display()}")
        return self.results.pop(0)


@dataclass
class FakePrompts(PromptProvider):
    """Prompt provider answering from scripted queues."""

    answers: List[Optional[str]] = field(default_factory=list)
    confirms: List[bool] = field(default_factory=list)
    choices: List[Optional[str]] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    offered: List[Sequence[str]] = field(default_factory=list)

    def prompt(self, message, default=None, password=False):
        self.messages.append(message)
        return self.answers.pop(0)

    def confirm(self, message, default=False):
        self.messages.append(message)
        return self.confirms.pop(0)

    def choose(self, message, options):
        self.messages.append(message)
        self.offered.append(list(options))
        answer = self.choices.pop(0)
        if answer is None:
            return None
        # allow picking by prefix, e.g. "prod" for "prod (user@host)"
        for option in options:
            if option == answer or option.startswith(answer + " "):
                return option
        raise AssertionError(f"{answer!r} not in {options!r}")

    def info(self, message):
        self.messages.append(message)


@pytest.fixture
def target():
    return SyncTarget(
        local_root="/proj",
        remote_root="/var/www/proj",
        host="user@10.0.0.5",
        exclude_patterns=(".git", "node_modules"),
    )


@pytest.fixture
def config_file(tmp_path):
    """Write a ~/.wwsync style file and return its path."""

    def _write(data: Dict[str, Any]):
        path = tmp_path / ".wwsync"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
