"""Line model shared by the partition and the transformations.

A line break is ``\\r\\n``, ``\\r`` or ``\\n`` and nothing else; form feeds,
``\\x85`` and the Unicode separators stay inside a line.
"""

import re
from typing import List, Tuple

_LINE_PATTERN = re.compile(r"([^\r\n]*)(\r\n|\r|\n)")


def split_terminated(text: str) -> List[Tuple[str, str]]:
    """Split text into (content, terminator) pairs; the last terminator may be ''."""
    parts = []
    position = 0
    for match in _LINE_PATTERN.finditer(text):
        parts.append((match.group(1), match.group(2)))
        position = match.end()
    if position < len(text):
        parts.append((text[position:], ""))
    return parts


def split_lines(text: str) -> List[str]:
    """Split text into lines, keeping each line's terminator.

    ``"".join(split_lines(text)) == text`` for every input.
    """
    return [content + terminator for content, terminator in split_terminated(text)]
