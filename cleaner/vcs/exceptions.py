"""Custom exceptions for the git collaborator."""

from typing import Sequence


class GitError(Exception):
    """Base exception for all git errors.

    Catching this exception covers every failure that should stop a git-mode
    cleanup run before any file is touched.
    """

    pass


class GitCommandError(GitError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str) -> None:
        """Initialize command error.

        Args:
            command: Full argument vector that was executed
            returncode: Exit status reported by git
            stderr: Captured standard error output
        """
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(
            f"git command failed with exit code {returncode}: "
            f"{' '.join(self.command)}" + (f": {self.stderr}" if self.stderr else "")
        )


class BaseBranchNotFoundError(GitError):
    """None of the candidate base branches exist in the repository."""

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)
        quoted = ", ".join(f'"{branch}"' for branch in self.candidates)
        super().__init__(f"None of the base branches exist: {quoted}")
