import pytest
from hypothesis import given, strategies as st

from text_cleanup.charsets import (
    ACCEPTED_RANGES,
    BIDI_CONTROLS,
    CONTROL_CHARS,
    EXOTIC_SPACES,
    INVISIBLE_OPERATORS,
    ZERO_WIDTH,
    CodepointRanges,
)


def test_rejects_empty_interval() -> None:
    with pytest.raises(ValueError, match="empty interval"):
        CodepointRanges(((5, 1),))


@pytest.mark.parametrize("bounds", [((1, 5), (3, 9)), ((10, 12), (1, 2)), ((1, 5), (5, 6))])
def test_rejects_unsorted_or_overlapping(bounds) -> None:
    with pytest.raises(ValueError, match="non-overlapping"):
        CodepointRanges(bounds)


def test_adjacent_intervals_are_allowed() -> None:
    ranges = CodepointRanges(((1, 2), (3, 4)))
    assert 2 in ranges and 3 in ranges


def test_from_pairs_sorts_and_merges() -> None:
    ranges = CodepointRanges.from_pairs([(10, 20), (1, 5), (6, 8), (15, 30)])
    assert ranges.bounds == ((1, 8), (10, 30))
    assert 9 not in ranges


@pytest.mark.parametrize(
    "codepoint, accepted",
    [
        (0x00, True),
        (0x7F, True),
        (0x80, False),
        (0x9F, False),
        (0xA0, True),
        (0x24F, True),
        (0x250, False),
        (0x3B1, False),
        (0x430, True),
        (0x1EBD, True),
        (0x2022, True),
        (0x20AC, True),
        (0x2122, True),
        (0x2192, True),
        (0x2200, False),
        (0x3042, False),
        (0x1F600, False),
    ],
)
def test_accepted_ranges_membership(codepoint: int, accepted: bool) -> None:
    assert (codepoint in ACCEPTED_RANGES) is accepted


def test_non_integer_membership_is_false() -> None:
    assert "a" not in ACCEPTED_RANGES
    assert -1 not in ACCEPTED_RANGES


@given(st.integers(min_value=0, max_value=0x10FFFF))
def test_membership_matches_linear_scan(codepoint: int) -> None:
    expected = any(lo <= codepoint <= hi for lo, hi in ACCEPTED_RANGES.bounds)
    assert (codepoint in ACCEPTED_RANGES) is expected


def test_hidden_classes_are_disjoint() -> None:
    classes = [ZERO_WIDTH, INVISIBLE_OPERATORS, BIDI_CONTROLS, EXOTIC_SPACES, CONTROL_CHARS]
    assert sum(map(len, classes)) == len(frozenset().union(*classes))


def test_line_breaks_and_tab_are_not_controls() -> None:
    assert not {0x09, 0x0A, 0x0D} & CONTROL_CHARS
