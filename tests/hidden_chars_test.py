import pytest

from text_cleanup.text_cleaning import strip_hidden_characters


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\u200bb", "ab"),
        ("a\u200b\u200c\u200d\ufeffb", "ab"),
        ("co\u00adoperate", "cooperate"),
        ("x\u2060\u2061\u2062\u2063\u2064y", "xy"),
        ("\u202eabc\u202c", "abc"),
        ("a\x00b\x07c\x1bd", "abcd"),
        ("\x7f\x85\x9f", ""),
    ],
)
def test_invisible_code_points_are_deleted(raw: str, expected: str) -> None:
    assert strip_hidden_characters(raw) == expected


@pytest.mark.parametrize(
    "space",
    [
        "\u00a0", "\u1680", "\u2000", "\u2003", "\u200a",
        "\u2028", "\u2029", "\u202f", "\u205f", "\u3000",
    ],
)
def test_exotic_spaces_become_plain_spaces(space: str) -> None:
    assert strip_hidden_characters(f"a{space}b") == "a b"


def test_tab_and_line_breaks_survive() -> None:
    assert strip_hidden_characters("a\tb\nc\rd") == "a\tb\nc\rd"


def test_plain_text_is_untouched() -> None:
    text = "Hello, world! caf\u00e9 \u2192 \u20ac5"
    assert strip_hidden_characters(text) == text


def test_empty_string() -> None:
    assert strip_hidden_characters("") == ""
