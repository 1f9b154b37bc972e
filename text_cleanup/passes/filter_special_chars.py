"""Final stage: allow-list filtering plus the closing whitespace cleanup."""

from __future__ import annotations

from dataclasses import dataclass, field

from text_cleanup.framework import Artifact, Pass, register
from text_cleanup.text_cleaning import FinalTrim, filter_special_characters


@dataclass(frozen=True)
class _FilterSpecialCharsPass:
    name: str = field(default="filter_special_chars", init=False)
    input_type: type = field(default=str, init=False)
    output_type: type = field(default=str, init=False)
    final_trim: FinalTrim = "full"
    flatten_newlines: bool = False

    def __call__(self, a: Artifact) -> Artifact:
        text = a.text
        if text is None:
            return a
        cleaned = filter_special_characters(
            text,
            final_trim=self.final_trim,
            flatten_newlines=self.flatten_newlines,
        )
        return a.with_text(self.name, cleaned)


filter_special_chars: Pass = register(_FilterSpecialCharsPass())
