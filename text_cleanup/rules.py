"""Rewrite rules and their ordered application.

A stage is a tuple of rules applied strictly left to right, each rule seeing
the full output of the one before it. Rules name their exact input set so a
stage reads as a table rather than a chain of substitutions.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from text_cleanup.charsets import CodepointRanges
from text_cleanup.inline_markup import strip_delimited

logger = logging.getLogger(__name__)

PREVIEW_LEN = 100


def _preview(s: str, n: int = PREVIEW_LEN) -> str:
    """Return a safe preview slice for debug logs."""
    return repr(s[:n])


@runtime_checkable
class Rule(Protocol):
    name: str

    def __call__(self, text: str) -> str:
        """Rewrite ``text``."""
        ...


@dataclass(frozen=True)
class TranslateRule:
    """Map each code point in ``table`` to its replacement in one scan."""

    name: str
    table: Mapping[int, str]

    @classmethod
    def mapping(cls, name: str, sources: Iterable[int], replacement: str) -> TranslateRule:
        """Send every code point in ``sources`` to ``replacement`` (``""`` deletes)."""
        return cls(name, MappingProxyType({cp: replacement for cp in sources}))

    def __call__(self, text: str) -> str:
        return text.translate(self.table)


@dataclass(frozen=True)
class PatternRule:
    name: str
    pattern: re.Pattern[str]
    replacement: str

    def __call__(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


@dataclass(frozen=True)
class DelimiterRule:
    """Unwrap ``delimiter``-paired spans, keeping the inner text."""

    name: str
    delimiter: str

    def __call__(self, text: str) -> str:
        return strip_delimited(text, self.delimiter)


@dataclass(frozen=True)
class AllowListRule:
    """Delete every code point outside ``accepted``."""

    name: str
    accepted: CodepointRanges

    def __call__(self, text: str) -> str:
        return "".join(ch for ch in text if ord(ch) in self.accepted)


@dataclass(frozen=True)
class FunctionRule:
    name: str
    func: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.func(text)


def merge_translations(name: str, rules: Sequence[TranslateRule]) -> TranslateRule:
    """Fold disjoint translate rules into one table applied in a single pass.

    Raises ``ValueError`` when two rules claim the same code point, since the
    merged result would then depend on rule order.
    """

    merged: Dict[int, str] = {}
    for rule in rules:
        overlap = merged.keys() & rule.table.keys()
        if overlap:
            shown = ", ".join(f"U+{cp:04X}" for cp in sorted(overlap)[:5])
            raise ValueError(f"translate rule {rule.name!r} overlaps earlier rules at {shown}")
        merged.update(rule.table)
    return TranslateRule(name, MappingProxyType(merged))


def _apply_rule(text: str, rule: Rule) -> str:
    updated = rule(text)
    if updated != text and logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"After {rule.name}: {_preview(updated)}")
    return updated


def apply_rules(rules: Sequence[Rule], text: str) -> str:
    """Apply ``rules`` in order to ``text``."""
    return reduce(_apply_rule, rules, text)
