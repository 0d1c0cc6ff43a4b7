"""Data models for the reconciliation engine.

This module defines the regions a modified text is split into, the outcome
of cleaning a single region, and the result of a whole reconcile call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple


class RegionStatus(str, Enum):
    """Whether a region differs from its aligned base block."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"


@dataclass(frozen=True)
class Region:
    """A contiguous span of the modified text aligned to a span of the base text.

    Line ranges are half-open and index the line lists produced by
    ``split_lines``. A pure insertion has an empty base range and an empty
    reference.

    Attributes:
        status: UNCHANGED regions are copied verbatim, CHANGED ones are cleaned
        text: Original modified text covered by this region
        reference: Aligned base text the region is scored against
        modified_start: First modified line index
        modified_end: One past the last modified line index
        base_start: First base line index
        base_end: One past the last base line index
    """

    status: RegionStatus
    text: str
    reference: str
    modified_start: int
    modified_end: int
    base_start: int
    base_end: int

    @property
    def is_changed(self) -> bool:
        return self.status is RegionStatus.CHANGED


@dataclass
class RegionOutcome:
    """Result of running the transformation fixpoint loop over one region.

    Attributes:
        region: Region that was processed
        cleaned: Text emitted for the region
        initial_score: similarity(reference, original text)
        final_score: similarity(reference, cleaned)
        applied: Names of accepted transformations, in acceptance order
    """

    region: Region
    cleaned: str
    initial_score: float = 0.0
    final_score: float = 0.0
    applied: List[str] = field(default_factory=list)

    @property
    def accepted_steps(self) -> int:
        """Number of transformations accepted before the fixpoint was reached."""
        return len(self.applied)

    @property
    def was_modified(self) -> bool:
        return self.cleaned != self.region.text


class ReconcileResult(NamedTuple):
    """The ``(cleaned, score)`` pair returned by ``reconcile``.

    Attributes:
        cleaned: Modified text with stylistic drift reconciled toward the base
        score: similarity(base, cleaned) over the whole texts
    """

    cleaned: str
    score: float


@dataclass
class ReconcileReport:
    """Detailed account of one reconcile call.

    Attributes:
        cleaned: Text returned to the caller
        score: similarity(base, cleaned) over the whole texts
        regions: Per-region outcomes in document order
        reverted: True when the assembled text scored below the untouched
            modified text and the modified text was returned instead
    """

    cleaned: str
    score: float
    regions: List[RegionOutcome] = field(default_factory=list)
    reverted: bool = False

    @property
    def result(self) -> ReconcileResult:
        return ReconcileResult(self.cleaned, self.score)

    @property
    def changed_regions(self) -> List[RegionOutcome]:
        return [outcome for outcome in self.regions if outcome.region.is_changed]

    @property
    def accepted_steps(self) -> int:
        """Total accepted transformations across all regions."""
        return sum(outcome.accepted_steps for outcome in self.regions)
