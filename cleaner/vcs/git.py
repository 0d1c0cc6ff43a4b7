"""Thin wrapper around the git command line.

Resolves the branches and files a cleanup run works on and reads file
contents as they are at a given commit. Nothing here stages or commits.
"""

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from cleaner.logging import get_logger

from .exceptions import BaseBranchNotFoundError, GitCommandError, GitError

logger = get_logger(__name__, component="vcs")


class GitRepository:
    """A git working tree addressed through the git binary."""

    def __init__(self, path: Path, git_executable: str = "git", encoding: str = "utf-8"):
        """Initialize GitRepository.

        Args:
            path: Any directory inside the working tree
            git_executable: git binary to invoke
            encoding: Encoding used to decode git output
        """
        self.path = Path(path)
        self.git_executable = git_executable
        self.encoding = encoding
        self._root: Optional[Path] = None

    def _run(self, *args: str) -> str:
        """Run a git subcommand in the working tree and return its stdout.

        Raises:
            GitCommandError: If git exits with a non-zero status
            GitError: If the git binary cannot be executed
        """
        command = [self.git_executable, "-C", str(self.path), *args]
        logger.debug(
            "Running git command",
            extra={"event": "vcs.command.started", "command": " ".join(command)},
        )
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise GitError(f"Failed to execute {self.git_executable}: {e}") from e

        if completed.returncode != 0:
            raise GitCommandError(
                command,
                completed.returncode,
                completed.stderr.decode(self.encoding, errors="replace"),
            )

        # Decoded by hand: universal newlines would turn CRLF into LF.
        return completed.stdout.decode(self.encoding, errors="surrogateescape")

    @property
    def root(self) -> Path:
        """Top-level directory of the working tree."""
        if self._root is None:
            self._root = Path(self._run("rev-parse", "--show-toplevel").strip())
        return self._root

    def get_current_branch(self) -> str:
        """Name of the checked-out branch ('HEAD' when detached)."""
        return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def list_branches(self) -> List[str]:
        """Names of all local branches."""
        output = self._run("branch", "--format=%(refname:short)")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_base_branch(self, candidates: Sequence[str] = ("main", "master")) -> str:
        """Return the first candidate branch that exists locally.

        Raises:
            BaseBranchNotFoundError: If no candidate exists
        """
        branches = set(self.list_branches())
        for candidate in candidates:
            if candidate in branches:
                return candidate
        raise BaseBranchNotFoundError(candidates)

    def get_merge_base(self, base_branch: str) -> str:
        """Commit at which HEAD forked from ``base_branch``."""
        return self._run("merge-base", base_branch, "HEAD").strip()

    def get_changed_files(self, base_ref: str) -> List[str]:
        """Files modified in the working tree relative to ``base_ref``.

        Pass the merge base so that committed and uncommitted edits since the
        fork point are both included. Added, deleted and renamed files are
        left out because they have no base counterpart at the same path.

        Returns:
            Paths relative to the repository root, in git's order
        """
        # -z: paths come back verbatim and NUL-separated, never C-quoted
        output = self._run("diff", "--name-only", "-z", "--diff-filter=M", base_ref)
        return [path for path in output.split("\0") if path]

    def show_file(self, ref: str, relative_path: str) -> str:
        """Content of ``relative_path`` as it is at ``ref``."""
        return self._run("show", f"{ref}:{relative_path}")
