import pytest

from text_cleanup.text_cleaning import normalize_whitespace


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a    b", "a b"),
        ("a \t\t b", "a b"),
        ("   lead", "lead"),
        ("trail   \nnext", "trail\nnext"),
        ("one\n   two", "one\ntwo"),
        ("\u2013\u2014\u2212", "---"),
        ("\u201cquoted\u201d", '"quoted"'),
        ("\u2018it\u2019s\u2019", "'it's'"),
    ],
)
def test_normalize_whitespace(raw: str, expected: str) -> None:
    assert normalize_whitespace(raw) == expected


def test_blank_line_runs_are_capped() -> None:
    assert normalize_whitespace("a\n\n\n\nb") == "a\n\nb"
    assert normalize_whitespace("a\n\nb") == "a\n\nb"


def test_blank_lines_with_spaces_are_capped() -> None:
    assert normalize_whitespace(" \n \n \n x") == "\n\nx"


def test_blank_lines_kept_when_collapse_disabled() -> None:
    assert normalize_whitespace("a\n\n\n\nb", collapse_blank_lines=False) == "a\n\n\n\nb"


def test_line_breaks_are_not_joined() -> None:
    assert normalize_whitespace("a\nb\nc") == "a\nb\nc"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\r\n\r\n\r\n\r\nb", "a\r\n\r\nb"),
        ("a\r\n\r\nb", "a\r\n\r\nb"),
        ("a\n\r\n\nb", "a\n\nb"),
        ("a  \r\n \r\n\r\n b", "a\r\n\r\nb"),
    ],
)
def test_crlf_blank_line_runs_are_capped(raw: str, expected: str) -> None:
    assert normalize_whitespace(raw) == expected


def test_crlf_runs_kept_when_collapse_disabled() -> None:
    raw = "a\r\n\r\n\r\nb"
    assert normalize_whitespace(raw, collapse_blank_lines=False) == raw
