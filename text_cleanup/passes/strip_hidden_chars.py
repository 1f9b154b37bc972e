from __future__ import annotations

from text_cleanup.framework import Artifact, register
from text_cleanup.text_cleaning import strip_hidden_characters


class _StripHiddenCharsPass:
    name = "strip_hidden_chars"
    input_type = str
    output_type = str

    def __call__(self, a: Artifact) -> Artifact:
        text = a.text
        if text is None:
            return a
        return a.with_text(self.name, strip_hidden_characters(text))


strip_hidden_chars = register(_StripHiddenCharsPass())
