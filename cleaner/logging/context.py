"""Scoped fields attached to every log record of a cleanup run.

The pipeline opens one scope per run (``run_id``) and a nested scope per file
(``file_path``); ``ContextualFilter`` copies the active fields onto each
record. Every push stores a fresh dict in a ContextVar and the stored dicts
are never mutated, so a nested scope cannot leak into the one around it.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator, Optional

_fields: ContextVar[Optional[Dict[str, Any]]] = ContextVar("cleaner_log_fields", default=None)


def get_log_context() -> Dict[str, Any]:
    """Return the active fields as a new, caller-owned dict."""
    return dict(_fields.get() or {})


def push_log_context(**fields: Any) -> Token:
    """Layer ``fields`` over the active ones; later keys win.

    Returns:
        Token for pop_log_context(), which restores the fields seen before the push
    """
    return _fields.set({**get_log_context(), **fields})


def pop_log_context(token: Token) -> None:
    _fields.reset(token)


def clear_log_context() -> None:
    """Drop every field. Tests use this to start from a clean slate."""
    _fields.set(None)


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Attach ``fields`` to every record logged inside the ``with`` block.

    Example:
        >>> with log_context(run_id="abc123", file_path="src/app.js"):
        ...     logger.info("Cleaning file")  # record carries run_id and file_path
    """
    token = push_log_context(**fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
