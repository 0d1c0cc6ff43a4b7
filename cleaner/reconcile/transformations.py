"""Style-normalizing transformations.

Every transformation is a pure function ``(text, reference) -> text`` that
nudges ``text`` toward one stylistic convention of ``reference``. They are
line-aware: line terminators survive untouched except in
``normalize_line_endings``, and multi-line texts are handled line by line,
text line *k* against reference line *k*. Text lines beyond the end of the
reference have no counterpart and are left alone by the per-line steps.

None of them is required to improve similarity; the engine only keeps a
result when it does.
"""

import re
from functools import reduce
from math import gcd
from typing import Callable, NamedTuple, Tuple

from .lines import split_terminated

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
_INDENT_PATTERN = re.compile(r"[ \t]*")

TAB_WIDTH = 4


class Transformation(NamedTuple):
    """A named entry of the fixed transformation list."""

    name: str
    apply: Callable[[str, str], str]


def _indent_of(content: str) -> str:
    return _INDENT_PATTERN.match(content).group(0)


def _indent_width(indent: str) -> int:
    return sum(TAB_WIDTH if char == "\t" else 1 for char in indent)


def normalize_quotes(text: str, reference: str) -> str:
    """Replace every quote character with the reference's dominant quote.

    The dominant quote is whichever of ``"`` and ``'`` occurs more often in
    the reference; ties (including no quotes at all) favor ``"``.
    """
    double_count = reference.count('"')
    single_count = reference.count("'")

    if double_count >= single_count:
        return text.replace("'", '"')
    return text.replace('"', "'")


def normalize_semicolons(text: str, reference: str) -> str:
    """Match the presence of a trailing semicolon line by line.

    Trailing whitespace after the semicolon position is kept. Blank text
    lines and lines beyond the end of the reference are left alone.
    """
    reference_lines = [content for content, _ in split_terminated(reference)]

    lines = []
    for index, (content, terminator) in enumerate(split_terminated(text)):
        body = content.rstrip()
        trailing = content[len(body):]

        if body and index < len(reference_lines):
            reference_body = reference_lines[index].rstrip()
            if reference_body.endswith(";") and not body.endswith(";"):
                body += ";"
            elif not reference_body.endswith(";") and body.endswith(";"):
                body = body[:-1]

        lines.append(body + trailing + terminator)

    return "".join(lines)


def normalize_whitespace(text: str, reference: str) -> str:
    """Collapse internal whitespace runs to one space and trim trailing whitespace.

    Each line keeps its own leading indentation; re-indenting is left to
    ``normalize_indentation``. Blank lines become empty.
    """
    lines = []
    for content, terminator in split_terminated(text):
        body = " ".join(content.split())
        if body:
            body = _indent_of(content) + body
        lines.append(body + terminator)

    return "".join(lines)


def normalize_indentation(text: str, reference: str) -> str:
    """Re-indent text with the reference's indentation unit.

    The reference unit is a tab when any reference line is tab-indented,
    otherwise the greatest common divisor of the reference's space indent
    widths. Each indented text line keeps its depth, measured in units of the
    text's own indent width (tabs count as TAB_WIDTH columns). When either side
    has no indentation the text is returned unchanged.
    """
    reference_indents = [
        _indent_of(content)
        for content, _ in split_terminated(reference)
        if content.strip()
    ]
    reference_indents = [indent for indent in reference_indents if indent]
    if not reference_indents:
        return text

    if any("\t" in indent for indent in reference_indents):
        reference_unit = "\t"
    else:
        reference_unit = " " * reduce(gcd, (len(indent) for indent in reference_indents))

    lines = split_terminated(text)
    text_widths = [
        _indent_width(_indent_of(content))
        for content, _ in lines
        if content.strip() and _indent_of(content)
    ]
    if not text_widths:
        return text

    text_unit = reduce(gcd, text_widths)

    result = []
    for content, terminator in lines:
        indent = _indent_of(content)
        if indent and content.strip():
            depth = _indent_width(indent) // text_unit
            content = reference_unit * depth + content[len(indent):]
        result.append(content + terminator)

    return "".join(result)


def normalize_line_endings(text: str, reference: str) -> str:
    """Use CRLF for every line break if the reference contains one, else LF."""
    target = "\r\n" if "\r\n" in reference else "\n"
    return _LINE_BREAK_PATTERN.sub(target, text)


TRANSFORMATIONS: Tuple[Transformation, ...] = (
    Transformation("quotes", normalize_quotes),
    Transformation("semicolons", normalize_semicolons),
    Transformation("whitespace", normalize_whitespace),
    Transformation("indentation", normalize_indentation),
    Transformation("line_endings", normalize_line_endings),
)
