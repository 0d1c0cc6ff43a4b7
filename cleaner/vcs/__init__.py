"""Git collaborator: branch resolution, changed files and base-branch contents."""

from .exceptions import BaseBranchNotFoundError, GitCommandError, GitError
from .git import GitRepository

__all__ = [
    "GitRepository",
    "GitError",
    "GitCommandError",
    "BaseBranchNotFoundError",
]
