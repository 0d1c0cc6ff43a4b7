"""Pipeline orchestration for cleaning changed files in a git working tree."""

import time
from datetime import datetime, timezone
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from cleaner.config.models import AppConfig
from cleaner.logging import get_logger
from cleaner.logging.context import log_context
from cleaner.reconcile import StyleReconciler
from cleaner.scoring import similarity
from cleaner.vcs import GitRepository

from .models import CleanupRunResult, FileCleanupResult

logger = get_logger(__name__, component="pipeline")


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a file without translating its line endings."""
    with open(path, "r", encoding=encoding, errors="surrogateescape", newline="") as f:
        return f.read()


def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write a file without translating its line endings."""
    with open(path, "w", encoding=encoding, errors="surrogateescape", newline="") as f:
        f.write(content)


class CleanupPipeline:
    """
    Cleans every file changed on the current branch relative to its base branch.

    For each changed file the pipeline reads the version at the merge base
    (the commit the branch forked from) through git, reconciles the working-tree version toward it and writes the result
    back when it differs. A failing file is recorded and the run moves on.
    """

    def __init__(
        self,
        app_config: AppConfig,
        repository: GitRepository,
        reconciler: Optional[StyleReconciler] = None,
    ):
        """
        Initialize the cleanup pipeline.

        Args:
            app_config: Application configuration
            repository: Working tree to clean
            reconciler: Reconciliation engine (defaults to the standard transformation set)
        """
        self.app_config = app_config
        self.repository = repository
        self.reconciler = reconciler or StyleReconciler()

    def run_once(self) -> CleanupRunResult:
        """
        Execute one cleanup run.

        Returns:
            CleanupRunResult with per-file outcomes

        Raises:
            GitError: If the branches or the changed file list cannot be resolved.
                Failures on individual files are captured in the result instead.
        """
        run_started_at = datetime.now(timezone.utc)
        run_id = uuid4().hex
        dry_run = self.app_config.cleanup.dry_run

        with log_context(run_id=run_id):
            current_branch = self.repository.get_current_branch()
            base_branch = self.repository.get_base_branch(self.app_config.git.base_branches)
            merge_base = self.repository.get_merge_base(base_branch)
            changed_files = self.repository.get_changed_files(merge_base)

            logger.info(
                f"Cleanup run started: {len(changed_files)} changed files",
                extra={
                    "event": "pipeline.run.started",
                    "base_branch": base_branch,
                    "merge_base": merge_base,
                    "current_branch": current_branch,
                    "changed_file_count": len(changed_files),
                    "dry_run": dry_run,
                },
            )

            file_results: List[FileCleanupResult] = []
            for relative_path in changed_files:
                with log_context(file_path=relative_path):
                    if self._is_excluded(relative_path):
                        logger.debug(
                            f"Skipping excluded file: {relative_path}",
                            extra={"event": "pipeline.file.skipped"},
                        )
                        file_results.append(FileCleanupResult(path=relative_path, skipped=True))
                        continue

                    file_results.append(self._process_file(merge_base, relative_path, dry_run))

            result = CleanupRunResult(
                run_started_at=run_started_at,
                run_finished_at=datetime.now(timezone.utc),
                base_branch=base_branch,
                merge_base=merge_base,
                current_branch=current_branch,
                dry_run=dry_run,
                file_results=file_results,
            )

            logger.info(
                "Cleanup run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "total_files": result.total_files,
                    "total_changed": result.total_changed,
                    "total_written": result.total_written,
                    "total_skipped": result.total_skipped,
                    "total_errors": result.total_errors,
                },
            )

            return result

    def _process_file(self, base_ref: str, relative_path: str, dry_run: bool) -> FileCleanupResult:
        """
        Clean one file: read base and current content, reconcile, write back.

        Args:
            base_ref: Commit holding the reference content (the merge base)
            relative_path: File path relative to the repository root
            dry_run: Report without writing

        Returns:
            FileCleanupResult for this file (error_message set on failure)
        """
        file_start = time.time()
        stats = FileCleanupResult(path=relative_path)
        encoding = self.app_config.cleanup.encoding

        try:
            base_content = self.repository.show_file(base_ref, relative_path)
            file_path = self.repository.root / relative_path
            current_content = read_text(file_path, encoding)

            report = self.reconciler.reconcile_with_report(base_content, current_content)

            stats.original_score = similarity(base_content, current_content)
            stats.score = report.score
            stats.accepted_steps = report.accepted_steps
            stats.changed = report.cleaned != current_content

            if stats.changed and not dry_run:
                write_text(file_path, report.cleaned, encoding)
                stats.written = True

            logger.info(
                f"Similarity index for {relative_path}: {report.score:.4f}",
                extra={
                    "event": "pipeline.file.cleaned",
                    "original_score": stats.original_score,
                    "score": stats.score,
                    "changed": stats.changed,
                    "written": stats.written,
                },
            )

        except Exception as e:
            stats.error_message = str(e)
            logger.error(
                f"Error processing file {relative_path}: {e}",
                extra={
                    "event": "pipeline.file.failed",
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )

        stats.duration_seconds = time.time() - file_start
        return stats

    def _is_excluded(self, relative_path: str) -> bool:
        return any(
            fnmatch(relative_path, pattern) for pattern in self.app_config.cleanup.exclude_patterns
        )
