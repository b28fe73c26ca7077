"""GitPython backend for staging, committing and pushing backdated commits."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable

from git import Repo
from git.exc import GitCommandError, GitError, InvalidGitRepositoryError, NoSuchPathError

from ..errors import PushError, StageOrCommitError


def to_git_date(date: str) -> str:
    """Convert an ISO-8601 timestamp into git's raw ``<epoch> <+hhmm>`` form."""
    moment = datetime.fromisoformat(date)
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return f"{int(moment.timestamp())} {moment.strftime('%z')}"


class GitBackend:
    """Wrapper around gitpython for the stage/commit/push cycle."""

    def __init__(self, repo_path: Path):
        try:
            self.repo = Repo(repo_path.resolve(), search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise ValueError(f"Not a valid git repository: {repo_path}") from e
        if self.repo.working_tree_dir is None:
            raise ValueError(f"Repository has no working tree: {repo_path}")
        self.repo_path = Path(self.repo.working_tree_dir)

    @property
    def active_branch(self) -> str | None:
        """Name of the checked-out branch, or ``None`` on a detached HEAD."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return None

    def stage(self, paths: Iterable[Path]) -> None:
        """Add ``paths`` to the index."""
        try:
            self.repo.index.add([str(path) for path in paths])
        except (GitError, OSError, ValueError) as e:
            raise StageOrCommitError(f"Staging failed: {e}") from e

    def commit(self, message: str, author_date: str, commit_date: str) -> str:
        """Commit the index with both timestamps overridden.

        Parameters
        ----------
        message:
            Commit message
        author_date:
            ISO-8601 author timestamp
        commit_date:
            ISO-8601 committer timestamp

        Returns
        -------
        SHA of the new commit
        """
        try:
            commit = self.repo.index.commit(
                message,
                author_date=to_git_date(author_date),
                commit_date=to_git_date(commit_date),
            )
        except (GitError, OSError, ValueError) as e:
            raise StageOrCommitError(f"Commit failed: {e}") from e
        return commit.hexsha

    def push(self, remote: str, branch: str, set_upstream: bool = True) -> None:
        """Push ``branch`` to ``remote``."""
        args = ["--set-upstream"] if set_upstream else []
        try:
            self.repo.git.push(*args, remote, branch)
        except GitCommandError as e:
            raise PushError(f"Push of {branch} to {remote} failed: {e}") from e
