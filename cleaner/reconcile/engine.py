"""Reconciliation engine: pulls a modified text back toward its base's style.

This module implements the cleaning logic that:
1. Partitions the modified text into unchanged and changed regions
2. Copies unchanged regions verbatim
3. Runs the transformation fixpoint loop over every changed region
4. Reassembles the text and scores it against the whole base
"""

import logging
from typing import List, Optional, Sequence, Tuple

from cleaner.logging import get_logger
from cleaner.scoring import similarity

from .models import ReconcileReport, ReconcileResult, Region, RegionOutcome
from .partition import partition
from .transformations import TRANSFORMATIONS, Transformation

logger = get_logger(__name__, component="reconcile")


def run_fixpoint(
    text: str,
    reference: str,
    transformations: Sequence[Transformation] = TRANSFORMATIONS,
) -> Tuple[str, float, List[str]]:
    """Greedily apply transformations until none strictly improves the score.

    The list is scanned in order. The first transformation whose output
    scores strictly higher against ``reference`` is adopted and the scan
    restarts from the first entry; a full scan without an acceptance ends
    the loop. Every acceptance raises a score bounded by 1.0, so the loop
    terminates.

    Args:
        text: Text to clean
        reference: Text the candidates are scored against
        transformations: Ordered transformation list

    Returns:
        Tuple of (cleaned text, its score, names of accepted transformations)
    """
    current = text
    current_score = similarity(reference, current)
    applied: List[str] = []

    while True:
        for transformation in transformations:
            candidate = transformation.apply(current, reference)
            candidate_score = similarity(reference, candidate)
            if candidate_score > current_score:
                current = candidate
                current_score = candidate_score
                applied.append(transformation.name)
                break
        else:
            return current, current_score, applied


class StyleReconciler:
    """Reconciles stylistic drift in a modified text toward a base text.

    Holds no per-call state: base and modified texts are passed to
    ``reconcile`` and threaded through plain functions, so one instance can
    serve any number of independent calls.
    """

    def __init__(
        self,
        transformations: Sequence[Transformation] = TRANSFORMATIONS,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize StyleReconciler.

        Args:
            transformations: Ordered transformation list (defaults to the fixed set)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.transformations = tuple(transformations)
        self.logger = logger_instance or logger

    def reconcile(self, base: str, modified: str) -> ReconcileResult:
        """Reconcile ``modified`` toward ``base`` and return ``(cleaned, score)``."""
        return self.reconcile_with_report(base, modified).result

    def reconcile_with_report(self, base: str, modified: str) -> ReconcileReport:
        """Reconcile ``modified`` toward ``base``, keeping per-region details.

        If the reassembled text scores below the untouched modified text
        against the base, the modified text is returned unchanged and the
        report is flagged as reverted.

        Args:
            base: Reference version of the document
            modified: Current version of the document

        Returns:
            ReconcileReport with the cleaned text, similarity(base, cleaned)
            and the outcome of every region
        """
        outcomes = [self.clean_region(region) for region in partition(base, modified)]

        cleaned = "".join(outcome.cleaned for outcome in outcomes)
        score = similarity(base, cleaned)
        reverted = False

        if cleaned != modified:
            original_score = similarity(base, modified)
            if score < original_score:
                self.logger.warning(
                    "Cleaned text scored below the original; keeping the original",
                    extra={
                        "event": "reconcile.reverted",
                        "score": score,
                        "original_score": original_score,
                    },
                )
                cleaned = modified
                score = original_score
                reverted = True

        changed = [outcome for outcome in outcomes if outcome.region.is_changed]
        self.logger.info(
            "Reconciled text",
            extra={
                "event": "reconcile.completed",
                "region_count": len(outcomes),
                "changed_region_count": len(changed),
                "modified_region_count": len([o for o in changed if o.was_modified]),
                "accepted_steps": sum(o.accepted_steps for o in outcomes),
                "score": score,
                "reverted": reverted,
            },
        )

        return ReconcileReport(cleaned=cleaned, score=score, regions=outcomes, reverted=reverted)

    def clean_region(self, region: Region) -> RegionOutcome:
        """Clean a single region; unchanged regions pass through verbatim."""
        if not region.is_changed:
            return RegionOutcome(
                region=region,
                cleaned=region.text,
                initial_score=1.0,
                final_score=1.0,
            )

        initial_score = similarity(region.reference, region.text)
        cleaned, final_score, applied = run_fixpoint(
            region.text, region.reference, self.transformations
        )

        self.logger.debug(
            f"Cleaned region at lines {region.modified_start}-{region.modified_end}",
            extra={
                "event": "reconcile.region.cleaned",
                "modified_start": region.modified_start,
                "modified_end": region.modified_end,
                "base_start": region.base_start,
                "base_end": region.base_end,
                "initial_score": initial_score,
                "final_score": final_score,
                "applied": applied,
            },
        )

        return RegionOutcome(
            region=region,
            cleaned=cleaned,
            initial_score=initial_score,
            final_score=final_score,
            applied=applied,
        )


def reconcile(base: str, modified: str) -> ReconcileResult:
    """Reconcile ``modified`` toward ``base`` with the default transformation set.

    Example:
        >>> cleaned, score = reconcile("x = 1;", "x = 1")
        >>> cleaned
        'x = 1;'
    """
    return StyleReconciler().reconcile(base, modified)
