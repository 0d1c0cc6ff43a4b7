"""Style reconciliation engine.

This module provides:
- partition: Split a modified text into regions aligned to its base
- TRANSFORMATIONS: The fixed, ordered list of style-normalizing transformations
- run_fixpoint: Greedy hill-climb over the transformations for one region
- StyleReconciler / reconcile: Full base-versus-modified reconciliation
"""

from .engine import StyleReconciler, reconcile, run_fixpoint
from .lines import split_lines
from .models import ReconcileReport, ReconcileResult, Region, RegionOutcome, RegionStatus
from .partition import partition
from .transformations import (
    TRANSFORMATIONS,
    Transformation,
    normalize_indentation,
    normalize_line_endings,
    normalize_quotes,
    normalize_semicolons,
    normalize_whitespace,
)

__all__ = [
    "StyleReconciler",
    "reconcile",
    "run_fixpoint",
    "partition",
    "split_lines",
    "ReconcileResult",
    "ReconcileReport",
    "Region",
    "RegionOutcome",
    "RegionStatus",
    "TRANSFORMATIONS",
    "Transformation",
    "normalize_quotes",
    "normalize_semicolons",
    "normalize_whitespace",
    "normalize_indentation",
    "normalize_line_endings",
]
