from __future__ import annotations

import random
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Set, Tuple

import pytest

from commitfill.errors import PushError, StageOrCommitError


class FixedRandom(random.Random):
    """Random source returning queued ``randint`` values, then zeros."""

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0) if self.values else a


@dataclass
class FakeBackend:
    """Record stage/commit/push calls and inject stage, commit or push failures."""

    fail_pushes: Set[int] = field(default_factory=set)
    fail_stage: bool = False
    fail_commit: bool = False
    staged: List[List[Path]] = field(default_factory=list)
    commits: List[Tuple[str, str, str]] = field(default_factory=list)
    pushes: List[Tuple[str, str, bool]] = field(default_factory=list)
    events: List[str] = field(default_factory=list)

    def stage(self, paths) -> None:
        self.events.append("stage")
        if self.fail_stage:
            raise StageOrCommitError("index locked")
        self.staged.append(list(paths))

    def commit(self, message: str, author_date: str, commit_date: str) -> str:
        self.events.append("commit")
        if self.fail_commit:
            raise StageOrCommitError("nothing to commit")
        self.commits.append((message, author_date, commit_date))
        return f"{len(self.commits):040d}"

    def push(self, remote: str, branch: str, set_upstream: bool = True) -> None:
        self.events.append("push")
        attempt = len(self.pushes)
        self.pushes.append((remote, branch, set_upstream))
        if attempt in self.fail_pushes:
            raise PushError("remote hung up unexpectedly")


def fixed_clock(moment: datetime):
    return lambda: moment


@pytest.fixture
def june_15() -> datetime:
    return datetime(2025, 6, 15, 9, 30, 0, tzinfo=timezone(timedelta(hours=2)))


@dataclass
class GitFixture:
    work: Path
    remote: Path
    repo: object
    bare: object


@pytest.fixture
def git_repos(tmp_path) -> GitFixture:
    """A working copy on ``master`` with ``origin`` pointing at a bare repository."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    git = pytest.importorskip("git")

    remote_path = tmp_path / "remote.git"
    bare = git.Repo.init(remote_path, bare=True)
    bare.git.symbolic_ref("HEAD", "refs/heads/master")

    work_path = tmp_path / "work"
    repo = git.Repo.init(work_path)
    repo.git.symbolic_ref("HEAD", "refs/heads/master")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
    repo.create_remote("origin", str(remote_path))
    return GitFixture(work=work_path, remote=remote_path, repo=repo, bare=bare)


def make_backend(
    fail_pushes: Optional[Set[int]] = None, fail_stage: bool = False, fail_commit: bool = False
) -> FakeBackend:
    return FakeBackend(
        fail_pushes=set(fail_pushes or ()), fail_stage=fail_stage, fail_commit=fail_commit
    )


def install_failing_pre_commit_hook(repo) -> None:
    hook = Path(repo.git_dir) / "hooks" / "pre-commit"
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text("#!/bin/sh\necho 'rejected by hook' >&2\nexit 1\n", encoding="utf-8")
    hook.chmod(0o755)
