"""Git integration for writing backdated commits."""

from .backend import GitBackend, to_git_date

__all__ = [
    "GitBackend",
    "to_git_date",
]
