"""Cleanup pipeline: runs the reconciliation engine over changed files."""

from .models import CleanupRunResult, FileCleanupResult
from .runner import CleanupPipeline, read_text, write_text

__all__ = [
    "CleanupPipeline",
    "CleanupRunResult",
    "FileCleanupResult",
    "read_text",
    "write_text",
]
