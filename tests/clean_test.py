import pytest
from pydantic import ValidationError

from text_cleanup import CleanOptions, clean


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\u200bb", "ab"),
        ("a\u00a0b", "a b"),
        ("\u201cHello\u2014world\u201d", '"Hello-world"'),
        ("**bold** and *italic* and `code`", "bold and italic and code"),
        ("a\u3042b", "ab"),
        ("a    b", "a b"),
        ("a\n\n\n\nb", "a\n\nb"),
        ("a\t\tb", "a b"),
        ("a * b * c", "a b c"),
        ("hi \U0001f600", "hi"),
        ("x \u03b1\u03b2\u03b3 y", "x y"),
        ("~~struck~~ text", "struck text"),
        ("\u22125 \u2018ok\u2019", "-5 'ok'"),
    ],
)
def test_clean_examples(raw: str, expected: str) -> None:
    assert clean(raw) == expected


@pytest.mark.parametrize("bullet", ["\u25e6", "\u2043", "\u2219", "\u2022"])
def test_bullets_become_canonical(bullet: str) -> None:
    assert clean(f"{bullet} item") == "\u2022 item"


@pytest.mark.parametrize(
    "value", ["", "   ", "\n\t\n", "\u200b", "\u3042\u3044\u3046", None, 42, b"x", ["a"]]
)
def test_empty_or_non_text_input_yields_empty_string(value) -> None:
    assert clean(value) == ""


def test_deletion_exposing_markup_is_cleaned() -> None:
    assert clean("~\u3042~x~~") == "x"


def test_result_is_idempotent_after_exposed_markup() -> None:
    once = clean("*\u3042*a**")
    assert clean(once) == once


def test_per_line_trim_keeps_outer_newlines() -> None:
    assert clean("\n\na\n\n", {"final_trim": "per-line"}) == "\n\na\n\n"
    assert clean("\n\na\n\n") == "a"


def test_keep_blank_lines() -> None:
    opts = CleanOptions(collapse_blank_lines=False)
    assert clean("a\n\n\n\nb", opts) == "a\n\n\n\nb"


def test_flatten_newlines() -> None:
    assert clean("a\n\nb  c", {"flatten_newlines": True}) == "a b c"


@pytest.mark.parametrize("options", [{"final_trim": "nope"}, {"unknown": True}])
def test_invalid_options_raise(options) -> None:
    with pytest.raises(ValidationError):
        clean("x", options)


def test_crlf_blank_lines_are_capped() -> None:
    assert clean("a\r\n\r\n\r\n\r\nb") == "a\r\n\r\nb"
