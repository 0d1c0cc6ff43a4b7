"""Format-agnostic tokenizer used by the similarity scorer."""

import re
from typing import List

# Structural delimiters; each occurrence is its own token.
DELIMITERS = "{}[](),;:+-*/%=<>!&|^~?"

_SPLIT_PATTERN = re.compile(r"(\s+|[" + re.escape(DELIMITERS) + r"])")


def tokenize(text: str) -> List[str]:
    """Split text into tokens.

    A token is a run of characters that are neither whitespace nor
    delimiters, a single whitespace run (line breaks included), or a single
    delimiter character. Whitespace and delimiters are kept so that spacing,
    indentation and line-ending differences show up in the score.

    Args:
        text: Text to tokenize

    Returns:
        Tokens in document order (empty list for empty text)

    Example:
        >>> tokenize('say("hi");')
        ['say', '(', '"hi"', ')', ';']
    """
    return [token for token in _SPLIT_PATTERN.split(text) if token]
