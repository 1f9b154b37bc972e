from __future__ import annotations

from dataclasses import dataclass, field

from text_cleanup.framework import Artifact, Pass, register
from text_cleanup.text_cleaning import normalize_whitespace as _normalize


@dataclass(frozen=True)
class _NormalizeWhitespacePass:
    name: str = field(default="normalize_whitespace", init=False)
    input_type: type = field(default=str, init=False)
    output_type: type = field(default=str, init=False)
    collapse_blank_lines: bool = True

    def __call__(self, a: Artifact) -> Artifact:
        text = a.text
        if text is None:
            return a
        cleaned = _normalize(text, collapse_blank_lines=self.collapse_blank_lines)
        return a.with_text(self.name, cleaned)


normalize_whitespace: Pass = register(_NormalizeWhitespacePass())
