"""Tests for logging context propagation."""

import pytest

from cleaner.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    assert get_log_context() == {}


def test_push_and_pop_fields():
    """Test pushing several fields at once and restoring the previous context."""
    token = push_log_context(run_id="abc123", file_path="src/app.js")
    assert get_log_context() == {"run_id": "abc123", "file_path": "src/app.js"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_push_pop():
    token1 = push_log_context(run_id="abc123")
    token2 = push_log_context(file_path="src/app.js")
    assert get_log_context() == {"run_id": "abc123", "file_path": "src/app.js"}

    pop_log_context(token2)
    assert get_log_context() == {"run_id": "abc123"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Test that pushing the same key overwrites the previous value until popped."""
    token1 = push_log_context(file_path="a.js")
    token2 = push_log_context(file_path="b.js")
    assert get_log_context() == {"file_path": "b.js"}

    pop_log_context(token2)
    assert get_log_context() == {"file_path": "a.js"}

    pop_log_context(token1)


def test_context_manager_nested():
    with log_context(run_id="abc123"):
        with log_context(file_path="src/app.js"):
            assert get_log_context() == {"run_id": "abc123", "file_path": "src/app.js"}

        assert get_log_context() == {"run_id": "abc123"}

    assert get_log_context() == {}


def test_context_manager_yields_active_fields():
    with log_context(run_id="abc123"):
        with log_context(file_path="src/app.js") as fields:
            assert fields == {"run_id": "abc123", "file_path": "src/app.js"}


def test_context_manager_restores_on_exception():
    with pytest.raises(ValueError):
        with log_context(run_id="abc123"):
            raise ValueError("boom")

    assert get_log_context() == {}


def test_clear_context():
    push_log_context(run_id="abc123", file_path="src/app.js")

    clear_log_context()

    assert get_log_context() == {}


def test_get_log_context_returns_copy():
    token = push_log_context(run_id="abc123")

    context = get_log_context()
    context["file_path"] = "modified"

    assert get_log_context() == {"run_id": "abc123"}
    pop_log_context(token)
