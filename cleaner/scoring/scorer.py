"""Similarity score between a reference text and a candidate text.

The score is anchored on the first argument: the numerator counts every
token occurrence of ``reference`` that appears anywhere in ``candidate``,
so ``similarity(a, b)`` and ``similarity(b, a)`` generally differ. Callers
always pass the base text first.
"""

from collections import Counter

from .tokenizer import tokenize


def similarity(reference: str, candidate: str) -> float:
    """Compute the token overlap of ``candidate`` with ``reference``.

    numerator:   occurrences of reference tokens that occur anywhere in candidate
    denominator: size of the multiset union of both token sequences
                 (for each distinct token, the larger of its two counts)

    When neither text repeats a token the denominator is the plain set union.
    The result lies in [0, 1] and is 1.0 whenever both texts have the same
    token multiset.

    Args:
        reference: Text the score is measured against (the base)
        candidate: Text being scored

    Returns:
        Score in [0, 1]; 0.0 when both texts have no tokens
    """
    reference_tokens = tokenize(reference)
    candidate_counts = Counter(tokenize(candidate))

    reference_counts = Counter(reference_tokens)
    union_size = sum((reference_counts | candidate_counts).values())
    if union_size == 0:
        return 0.0

    overlap = sum(1 for token in reference_tokens if token in candidate_counts)
    return overlap / union_size
