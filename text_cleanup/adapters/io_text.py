"""Plain-text sources and sinks for the command line."""

from __future__ import annotations

import sys
from pathlib import Path

STDIO = "-"


def is_stdio(path: str | Path | None) -> bool:
    return path is None or str(path) == STDIO


def read(path: str | Path | None) -> str:
    """Return the text at ``path`` (stdin when ``None`` or ``-``).

    Undecodable bytes become U+FFFD instead of failing, from stdin and files
    alike; the cleaner drops them.
    """
    if is_stdio(path):
        return sys.stdin.buffer.read().decode("utf-8", errors="replace")
    return Path(path).read_text(encoding="utf-8", errors="replace")  # type: ignore[arg-type]


def write(text: str, path: str | Path | None) -> None:
    """Write ``text`` to ``path``; stdout gets a trailing newline when ``text`` is non-empty."""
    if is_stdio(path):
        sys.stdout.write(f"{text}\n" if text else "")
        sys.stdout.flush()
        return
    path_obj = Path(path)  # type: ignore[arg-type]
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(text, encoding="utf-8")
