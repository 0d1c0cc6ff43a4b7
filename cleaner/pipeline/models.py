"""Data models for cleanup run tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class FileCleanupResult:
    """
    Outcome of cleaning a single file.

    Attributes:
        path: File path relative to the repository root
        original_score: similarity(base, file as found)
        score: similarity(base, cleaned file)
        changed: Whether the cleaned content differs from the file as found
        written: Whether the cleaned content was written back
        skipped: Whether the file was excluded from cleaning
        accepted_steps: Total accepted transformations across the file's regions
        duration_seconds: Time spent on the file
        error_message: Error message if the file failed
    """

    path: str
    original_score: float = 0.0
    score: float = 0.0
    changed: bool = False
    written: bool = False
    skipped: bool = False
    accepted_steps: int = 0
    duration_seconds: float = 0.0
    error_message: Optional[str] = None

    @property
    def had_error(self) -> bool:
        return self.error_message is not None


@dataclass
class CleanupRunResult:
    """
    Aggregate results of one cleanup run.

    Attributes:
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        base_branch: Branch the files were compared against
        merge_base: Commit where the current branch forked from base_branch
        current_branch: Branch checked out in the working tree
        dry_run: Whether writes were suppressed
        file_results: Per-file outcomes in processing order
        total_duration_seconds: Total time for the run
    """

    run_started_at: datetime
    run_finished_at: datetime
    base_branch: str = ""
    merge_base: str = ""
    current_branch: str = ""
    dry_run: bool = False
    file_results: List[FileCleanupResult] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    def __post_init__(self):
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def total_files(self) -> int:
        return len(self.file_results)

    @property
    def total_changed(self) -> int:
        return sum(1 for r in self.file_results if r.changed)

    @property
    def total_written(self) -> int:
        return sum(1 for r in self.file_results if r.written)

    @property
    def total_skipped(self) -> int:
        return sum(1 for r in self.file_results if r.skipped)

    @property
    def total_errors(self) -> int:
        return sum(1 for r in self.file_results if r.had_error)

    @property
    def had_errors(self) -> bool:
        return self.total_errors > 0
