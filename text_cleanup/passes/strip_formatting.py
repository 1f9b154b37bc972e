from __future__ import annotations

from text_cleanup.framework import Artifact, register
from text_cleanup.text_cleaning import strip_formatting as _strip


class _StripFormattingPass:
    name = "strip_formatting"
    input_type = str
    output_type = str

    def __call__(self, a: Artifact) -> Artifact:
        text = a.text
        if text is None:
            return a
        return a.with_text(self.name, _strip(text))


strip_formatting = register(_StripFormattingPass())
