"""Exceptions raised while fabricating commit history."""

from __future__ import annotations


class CommitFillError(Exception):
    """Base class for all commitfill failures."""


class ConfigError(CommitFillError):
    """Raised when a configuration file or value is invalid."""


class WriteError(CommitFillError):
    """Raised when the status file cannot be written."""


class StageOrCommitError(CommitFillError):
    """Raised when staging or committing the status file fails."""


class PushError(CommitFillError):
    """Raised when pushing the branch to the remote fails."""


class FinalPushError(PushError):
    """Raised when the closing push after the commit loop fails."""
