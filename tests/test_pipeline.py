"""Unit tests for the cleanup pipeline.

Tests the CleanupPipeline orchestration including:
- Reading base content through git and the working tree from disk
- Writing cleaned files back, or not in dry-run mode
- Exclude patterns
- Error isolation (one failing file does not stop the others)
- Run-level aggregation
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from cleaner.config.models import AppConfig, CleanupConfig, GitConfig
from cleaner.pipeline import (
    CleanupPipeline,
    CleanupRunResult,
    FileCleanupResult,
    read_text,
    write_text,
)
from cleaner.vcs import BaseBranchNotFoundError, GitCommandError, GitRepository


@pytest.fixture
def app_config():
    return AppConfig(git=GitConfig(base_branches=["main", "master"]))


@pytest.fixture
def work_tree(tmp_path):
    """A working tree with two edited files."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_bytes(b"say('hi')\n")
    (tmp_path / "src" / "same.js").write_bytes(b"const a = 1;\n")
    return tmp_path


@pytest.fixture
def repository(work_tree):
    """GitRepository mock whose base branch holds double-quoted, semicolon-terminated code."""
    base_contents = {
        "src/app.js": 'say("hi");\n',
        "src/same.js": "const a = 1;\n",
    }
    repo = MagicMock(spec=GitRepository)
    repo.root = work_tree
    repo.get_current_branch.return_value = "feature"
    repo.get_base_branch.return_value = "main"
    repo.get_merge_base.return_value = "abc123"
    repo.get_changed_files.return_value = ["src/app.js", "src/same.js"]
    repo.show_file.side_effect = lambda ref, path: base_contents[path]
    return repo


class TestCleanupPipeline:
    """Tests for CleanupPipeline.run_once()."""

    def test_cleans_and_writes_changed_files(self, app_config, repository, work_tree):
        result = CleanupPipeline(app_config, repository).run_once()

        assert (work_tree / "src" / "app.js").read_bytes() == b'say("hi");\n'
        assert (work_tree / "src" / "same.js").read_bytes() == b"const a = 1;\n"

        assert result.base_branch == "main"
        assert result.current_branch == "feature"
        assert result.total_files == 2
        assert result.total_changed == 1
        assert result.total_written == 1
        assert result.had_errors is False

        app_result, same_result = result.file_results
        assert app_result.path == "src/app.js"
        assert app_result.changed is True
        assert app_result.written is True
        assert app_result.score == 1.0
        assert app_result.original_score < app_result.score
        assert app_result.accepted_steps == 2
        assert same_result.changed is False
        assert same_result.written is False

    def test_asks_git_with_configured_branches(self, app_config, repository):
        CleanupPipeline(app_config, repository).run_once()

        repository.get_base_branch.assert_called_once_with(["main", "master"])
        repository.get_merge_base.assert_called_once_with("main")
        repository.get_changed_files.assert_called_once_with("abc123")
        repository.show_file.assert_any_call("abc123", "src/app.js")

    def test_base_content_comes_from_fork_point(self, app_config, repository, work_tree):
        # main has since moved on and dropped its semicolons; the branch never saw that
        contents = {"abc123": 'say("hi");\n', "main": 'say("hi")\n'}
        repository.get_changed_files.return_value = ["src/app.js"]
        repository.show_file.side_effect = lambda ref, path: contents[ref]

        result = CleanupPipeline(app_config, repository).run_once()

        assert result.merge_base == "abc123"
        assert (work_tree / "src" / "app.js").read_bytes() == b'say("hi");\n'

    def test_non_ascii_paths_are_cleaned(self, app_config, repository, work_tree):
        (work_tree / "café.js").write_text("x = 1\n", encoding="utf-8")
        repository.get_changed_files.return_value = ["café.js"]
        repository.show_file.side_effect = None
        repository.show_file.return_value = "x = 1;\n"

        result = CleanupPipeline(app_config, repository).run_once()

        assert result.had_errors is False
        assert (work_tree / "café.js").read_text(encoding="utf-8") == "x = 1;\n"

    def test_dry_run_does_not_write(self, repository, work_tree):
        app_config = AppConfig(cleanup=CleanupConfig(dry_run=True))

        result = CleanupPipeline(app_config, repository).run_once()

        assert (work_tree / "src" / "app.js").read_bytes() == b"say('hi')\n"
        assert result.dry_run is True
        assert result.total_changed == 1
        assert result.total_written == 0

    def test_excluded_files_are_skipped(self, repository, work_tree):
        app_config = AppConfig(cleanup=CleanupConfig(exclude_patterns=["src/app.*"]))

        result = CleanupPipeline(app_config, repository).run_once()

        assert (work_tree / "src" / "app.js").read_bytes() == b"say('hi')\n"
        assert result.total_skipped == 1
        assert result.file_results[0].skipped is True
        assert result.file_results[1].skipped is False

    def test_one_failing_file_does_not_stop_the_run(self, app_config, repository, work_tree):
        repository.get_changed_files.return_value = ["src/missing.js", "src/app.js"]

        def show_file(ref, path):
            if path == "src/missing.js":
                raise GitCommandError(["git", "show"], 128, "fatal: path does not exist")
            return 'say("hi");\n'

        repository.show_file.side_effect = show_file

        result = CleanupPipeline(app_config, repository).run_once()

        failed, cleaned = result.file_results
        assert failed.had_error is True
        assert "fatal: path does not exist" in failed.error_message
        assert cleaned.written is True
        assert result.total_errors == 1
        assert result.had_errors is True

    def test_no_changed_files(self, app_config, repository):
        repository.get_changed_files.return_value = []

        result = CleanupPipeline(app_config, repository).run_once()

        assert result.total_files == 0
        assert result.had_errors is False

    def test_missing_base_branch_propagates(self, app_config, repository):
        repository.get_base_branch.side_effect = BaseBranchNotFoundError(["main", "master"])

        with pytest.raises(BaseBranchNotFoundError):
            CleanupPipeline(app_config, repository).run_once()

    def test_crlf_files_keep_their_line_endings(self, app_config, repository, work_tree):
        (work_tree / "src" / "app.js").write_bytes(b"a = 1;\r\nb = 2\r\n")
        repository.get_changed_files.return_value = ["src/app.js"]
        repository.show_file.side_effect = None
        repository.show_file.return_value = "a = 1;\r\nb = 2;\r\n"

        CleanupPipeline(app_config, repository).run_once()

        assert (work_tree / "src" / "app.js").read_bytes() == b"a = 1;\r\nb = 2;\r\n"


class TestModels:
    """Tests for run result aggregation."""

    def test_duration_is_computed(self):
        started = datetime(2026, 1, 1, tzinfo=timezone.utc)

        result = CleanupRunResult(run_started_at=started, run_finished_at=started + timedelta(seconds=3))

        assert result.total_duration_seconds == 3.0

    def test_totals(self):
        now = datetime.now(timezone.utc)
        result = CleanupRunResult(
            run_started_at=now,
            run_finished_at=now,
            file_results=[
                FileCleanupResult(path="a", changed=True, written=True),
                FileCleanupResult(path="b", skipped=True),
                FileCleanupResult(path="c", error_message="boom"),
            ],
        )

        assert result.total_files == 3
        assert result.total_changed == 1
        assert result.total_written == 1
        assert result.total_skipped == 1
        assert result.total_errors == 1


def test_read_and_write_text_preserve_line_endings(tmp_path):
    path = tmp_path / "mixed.txt"

    write_text(path, "a\r\nb\nc\r")

    assert path.read_bytes() == b"a\r\nb\nc\r"
    assert read_text(path) == "a\r\nb\nc\r"
