from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from text_cleanup.adapters import io_text


def _parse(lines: Iterable[str]) -> Iterator[Any]:
    return (json.loads(line) for line in lines if line.strip())


def read_rows(path: str | Path | None) -> Iterator[Any]:
    """Yield one decoded JSON value per non-blank line of ``path``."""
    return _parse(io_text.read(path).splitlines())


def clean_rows(
    rows: Iterable[Any], field: str, clean_fn: Callable[[Any], str]
) -> Iterator[dict[str, Any]]:
    """Replace ``row[field]`` with its cleaned value; non-object rows become ``{field: ""}``."""
    for row in rows:
        base = dict(row) if isinstance(row, Mapping) else {}
        yield {**base, field: clean_fn(base.get(field))}


def _serialize(rows: Iterable[Mapping[str, Any]]) -> Iterator[str]:
    """Serialize dictionaries to JSON lines."""
    return (json.dumps(r, ensure_ascii=False) for r in rows)


def write_rows(rows: Iterable[Mapping[str, Any]], path: str | Path | None) -> int:
    """Write ``rows`` as JSONL to ``path`` (stdout when ``None``); return the row count."""
    lines = list(_serialize(rows))
    body = "\n".join(lines)
    if io_text.is_stdio(path):
        io_text.write(body, path)
    else:
        io_text.write(f"{body}\n" if body else "", path)
    return len(lines)
