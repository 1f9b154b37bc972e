"""Code point classes used by the cleaning stages.

Every class is a frozenset of integer code points so stages can compose them
into translation tables without going through a pattern engine. The accepted
output alphabet is kept as sorted inclusive intervals in :class:`CodepointRanges`.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from itertools import chain
from typing import FrozenSet, Iterable, Tuple

Interval = Tuple[int, int]


def _span(start: int, end: int) -> range:
    """Inclusive range of code points."""
    return range(start, end + 1)


# ---------------------------------------------------------------------------
# Hidden characters (deleted)
# ---------------------------------------------------------------------------

ZERO_WIDTH: FrozenSet[int] = frozenset(chain(_span(0x200B, 0x200D), (0xFEFF,)))
INVISIBLE_OPERATORS: FrozenSet[int] = frozenset(chain((0x00AD,), _span(0x2060, 0x2064)))
BIDI_CONTROLS: FrozenSet[int] = frozenset(_span(0x202A, 0x202E))
# C0/C1 controls except tab, line feed and carriage return
CONTROL_CHARS: FrozenSet[int] = frozenset(
    chain(
        _span(0x0000, 0x0008),
        _span(0x000B, 0x000C),
        _span(0x000E, 0x001F),
        _span(0x007F, 0x009F),
    )
)

# ---------------------------------------------------------------------------
# Exotic spaces (become U+0020)
# ---------------------------------------------------------------------------

EXOTIC_SPACES: FrozenSet[int] = frozenset(
    chain(
        (
            0x00A0,  # no-break space
            0x1680,  # ogham space mark
        ),
        _span(0x2000, 0x200A),  # en quad .. hair space
        (
            0x2028,  # line separator
            0x2029,  # paragraph separator
            0x202F,  # narrow no-break space
            0x205F,  # medium mathematical space
            0x3000,  # ideographic space
        ),
    )
)

# ---------------------------------------------------------------------------
# Punctuation variants
# ---------------------------------------------------------------------------

EN_EM_DASHES: FrozenSet[int] = frozenset({0x2013, 0x2014})
DASHES: FrozenSet[int] = EN_EM_DASHES | {0x2212}  # + minus sign
DOUBLE_QUOTES: FrozenSet[int] = frozenset({0x201C, 0x201D})
SINGLE_QUOTES: FrozenSet[int] = frozenset({0x2018, 0x2019})

CANONICAL_BULLET = "•"
BULLETS: FrozenSet[int] = frozenset({0x2022, 0x25E6, 0x2043, 0x2219})


# ---------------------------------------------------------------------------
# Allow-list
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CodepointRanges:
    """Sorted, non-overlapping inclusive code point intervals.

    Membership is a binary search over the interval starts, so a lookup costs
    ``O(log n)`` in the number of intervals regardless of their width.

    >>> ranges = CodepointRanges(((0x41, 0x5A), (0x61, 0x7A)))
    >>> ord("q") in ranges, ord("_") in ranges
    (True, False)
    """

    bounds: Tuple[Interval, ...]
    _starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for start, end in self.bounds:
            if start > end:
                raise ValueError(f"empty interval: {start:#06x}..{end:#06x}")
        for (_, prev_end), (start, _) in zip(self.bounds, self.bounds[1:]):
            if start <= prev_end:
                raise ValueError("intervals must be sorted and non-overlapping")
        object.__setattr__(self, "_starts", tuple(start for start, _ in self.bounds))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Interval]) -> CodepointRanges:
        """Build ranges from unordered pairs, merging overlapping or adjacent ones."""
        merged: list[Interval] = []
        for start, end in sorted(pairs):
            if merged and start <= merged[-1][1] + 1:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return cls(tuple(merged))

    def __contains__(self, codepoint: object) -> bool:
        if not isinstance(codepoint, int):
            return False
        idx = bisect_right(self._starts, codepoint) - 1
        return idx >= 0 and codepoint <= self.bounds[idx][1]


ACCEPTED_RANGES = CodepointRanges(
    (
        (0x0000, 0x007F),  # Basic Latin
        (0x00A0, 0x024F),  # Latin-1 Supplement, Latin Extended-A/B
        (0x0400, 0x04FF),  # Cyrillic
        (0x1E00, 0x1EFF),  # Latin Extended Additional
        (0x2000, 0x206F),  # General Punctuation
        (0x20A0, 0x20CF),  # Currency Symbols
        (0x2100, 0x214F),  # Letterlike Symbols
        (0x2190, 0x21FF),  # Arrows
    )
)
