"""Token-based similarity scoring.

This module provides:
- tokenize: Split text into word, whitespace and delimiter tokens
- similarity: Base-anchored token overlap score in [0, 1]
"""

from .scorer import similarity
from .tokenizer import DELIMITERS, tokenize

__all__ = [
    "similarity",
    "tokenize",
    "DELIMITERS",
]
