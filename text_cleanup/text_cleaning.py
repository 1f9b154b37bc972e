"""text_cleaning

Public API (stable):
- strip_hidden_characters
- normalize_whitespace
- strip_formatting
- filter_special_characters

Notes:
- Every function is a total ``str -> str`` transform with no side effects
  other than debug logging.
- Each stage is an explicit, ordered tuple of rules (see ``text_cleanup.rules``);
  parameterized stages build their tuple once per parameter combination.
- Stages are meant to run in the order listed above; ``text_cleanup.core``
  wires them up as registered passes.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Literal, Tuple

from text_cleanup.charsets import (
    ACCEPTED_RANGES,
    BIDI_CONTROLS,
    BULLETS,
    CANONICAL_BULLET,
    CONTROL_CHARS,
    DASHES,
    DOUBLE_QUOTES,
    EN_EM_DASHES,
    EXOTIC_SPACES,
    INVISIBLE_OPERATORS,
    SINGLE_QUOTES,
    ZERO_WIDTH,
)
from text_cleanup.rules import (
    AllowListRule,
    DelimiterRule,
    FunctionRule,
    PatternRule,
    Rule,
    TranslateRule,
    apply_rules,
    merge_translations,
)

FinalTrim = Literal["per-line", "full"]

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# Only space and tab count as horizontal whitespace; line breaks are never touched.
HORIZONTAL_RUN_RE = re.compile(r"[ \t]+")
LINE_END_WS_RE = re.compile(r"[ \t]+(?=[\r\n]|\Z)")
LINE_START_WS_RE = re.compile(r"(?:\A|(?<=[\r\n]))[ \t]+")
# three or more line ends, LF or CRLF; the first one sets the kept style
BLANK_LINE_RUN_RE = re.compile(r"(\r?\n)(?:\r?\n){2,}")
ANY_WHITESPACE_RUN_RE = re.compile(r"\s+")

_HORIZONTAL_RUNS = PatternRule("horizontal_runs", HORIZONTAL_RUN_RE, " ")
_LINE_END_WS = PatternRule("line_end_whitespace", LINE_END_WS_RE, "")
_LINE_START_WS = PatternRule("line_start_whitespace", LINE_START_WS_RE, "")

# ---------------------------------------------------------------------------
# Hidden characters
# ---------------------------------------------------------------------------

HIDDEN_CHARACTER_RULES: Tuple[TranslateRule, ...] = (
    TranslateRule.mapping("zero_width", ZERO_WIDTH, ""),
    TranslateRule.mapping("invisible_operators", INVISIBLE_OPERATORS, ""),
    TranslateRule.mapping("bidi_controls", BIDI_CONTROLS, ""),
    TranslateRule.mapping("exotic_spaces", EXOTIC_SPACES, " "),
    TranslateRule.mapping("control_characters", CONTROL_CHARS, ""),
)

# The classes are disjoint, so one left-to-right scan applies all of them.
_HIDDEN_CHARACTER_SCAN = merge_translations("hidden_characters", HIDDEN_CHARACTER_RULES)


def strip_hidden_characters(text: str) -> str:
    """Delete invisible, directional and control code points; plain-space exotic spaces.

    >>> strip_hidden_characters("a\\u200bb\\u00a0c")
    'ab c'
    """
    return apply_rules((_HIDDEN_CHARACTER_SCAN,), text)


# ---------------------------------------------------------------------------
# Whitespace and punctuation variants
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def whitespace_rules(collapse_blank_lines: bool = True) -> Tuple[Rule, ...]:
    """Ordered whitespace rules; the blank-line cap runs last when enabled."""
    rules: Tuple[Rule, ...] = (
        TranslateRule.mapping("dashes", DASHES, "-"),
        TranslateRule.mapping("double_quotes", DOUBLE_QUOTES, '"'),
        TranslateRule.mapping("single_quotes", SINGLE_QUOTES, "'"),
        _HORIZONTAL_RUNS,
        _LINE_END_WS,
        _LINE_START_WS,
    )
    if collapse_blank_lines:
        rules += (PatternRule("blank_line_cap", BLANK_LINE_RUN_RE, r"\1\1"),)
    return rules


def normalize_whitespace(text: str, *, collapse_blank_lines: bool = True) -> str:
    """Canonicalize dashes and quotes, then tidy spaces and tabs line by line.

    With ``collapse_blank_lines`` three or more consecutive line ends (LF or
    CRLF) shrink to two, keeping at most one blank line between paragraphs.

    >>> normalize_whitespace("  \\u201cHi\\u201d   there\\u2014you \\n\\n\\n\\nend")
    '"Hi" there-you\\n\\nend'
    """
    return apply_rules(whitespace_rules(collapse_blank_lines), text)


# ---------------------------------------------------------------------------
# Formatting markers
# ---------------------------------------------------------------------------

# ``**`` must precede ``*`` so bold spans are not read as nested italics.
FORMATTING_RULES: Tuple[Rule, ...] = (
    DelimiterRule("bold", "**"),
    DelimiterRule("italic", "*"),
    DelimiterRule("underline", "_"),
    DelimiterRule("inline_code", "`"),
    DelimiterRule("strikethrough", "~~"),
    TranslateRule.mapping("bullets", BULLETS, CANONICAL_BULLET),
    TranslateRule.mapping("dashes", EN_EM_DASHES, "-"),
)


def strip_formatting(text: str) -> str:
    """Unwrap markdown-style emphasis/code/strikethrough and canonicalize bullets."""
    return apply_rules(FORMATTING_RULES, text)


# ---------------------------------------------------------------------------
# Special characters
# ---------------------------------------------------------------------------

_ALLOW_LIST = AllowListRule("allow_list", ACCEPTED_RANGES)


@lru_cache(maxsize=None)
def special_character_rules(
    final_trim: FinalTrim = "full", flatten_newlines: bool = False
) -> Tuple[Rule, ...]:
    """Allow-list filter followed by the final whitespace cleanup."""
    if final_trim not in ("per-line", "full"):
        raise ValueError(f"final_trim must be 'per-line' or 'full', got {final_trim!r}")
    collapse: Rule = (
        PatternRule("flatten_whitespace", ANY_WHITESPACE_RUN_RE, " ")
        if flatten_newlines
        else _HORIZONTAL_RUNS
    )
    outer: Tuple[Rule, ...] = (
        (FunctionRule("outer_trim", str.strip),) if final_trim == "full" else ()
    )
    return (_ALLOW_LIST, collapse, _LINE_END_WS, _LINE_START_WS, *outer)


def filter_special_characters(
    text: str, *, final_trim: FinalTrim = "full", flatten_newlines: bool = False
) -> str:
    """Drop code points outside the accepted ranges, then clean up whitespace.

    ``final_trim="per-line"`` only trims each line's edges; ``"full"`` also
    strips the result's outer whitespace, newlines included.
    ``flatten_newlines`` collapses every whitespace run, line breaks too,
    to a single space.

    >>> filter_special_characters("  caf\\u00e9 \\u3042 ok \\n")
    'café ok'
    """
    return apply_rules(special_character_rules(final_trim, flatten_newlines), text)


__all__ = [
    "FinalTrim",
    "HIDDEN_CHARACTER_RULES",
    "FORMATTING_RULES",
    "whitespace_rules",
    "special_character_rules",
    "strip_hidden_characters",
    "normalize_whitespace",
    "strip_formatting",
    "filter_special_characters",
]
