"""Lightweight markup delimiter removal.

``strip_delimited`` pairs delimiters the way a lazy ``D(.*?)D`` substitution
does, without a regex: scanning stays on one line, the first close after an
open wins, and pairs never overlap.
"""

from __future__ import annotations

import re

_LINE_BREAK_RE = re.compile(r"([\r\n])")


def _strip_line(line: str, delimiter: str) -> str:
    """Remove delimiter pairs inside a single line, keeping their content."""

    width = len(delimiter)
    parts: list[str] = []
    cursor = 0
    while True:
        # scanning: next opening delimiter
        opened = line.find(delimiter, cursor)
        if opened < 0:
            break
        # content: shortest run up to the first closing delimiter
        closed = line.find(delimiter, opened + width)
        if closed < 0:
            # no later opener can close either; the rest stays literal
            break
        parts.append(line[cursor:opened])
        parts.append(line[opened + width : closed])
        # closed: resume after the closing delimiter
        cursor = closed + width
    parts.append(line[cursor:])
    return "".join(parts)


def strip_delimited(text: str, delimiter: str) -> str:
    """Return ``text`` with every ``delimiter``-wrapped span unwrapped.

    >>> strip_delimited("**a** and **b**", "**")
    'a and b'
    >>> strip_delimited("*open\\nclose*", "*")
    '*open\\nclose*'
    >>> strip_delimited("****", "**")
    ''
    """

    if not delimiter:
        raise ValueError("delimiter must be non-empty")
    if delimiter not in text:
        return text
    segments = _LINE_BREAK_RE.split(text)
    # even indices are line bodies, odd indices the captured breaks
    return "".join(
        _strip_line(segment, delimiter) if idx % 2 == 0 else segment
        for idx, segment in enumerate(segments)
    )
