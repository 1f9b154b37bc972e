from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import typer

from text_cleanup.adapters import io_text, jsonl
from text_cleanup.config import PipelineSpec, load_spec
from text_cleanup.core import clean_with_timings, configured_passes, run_inspect

LOG_FORMAT = "[%(levelname)s] %(name)s:%(funcName)s - %(message)s"


def _spec_path_candidates(path: str | Path) -> Iterator[Path]:
    """Yield potential spec locations without hitting the filesystem."""
    candidate = Path(path)
    pkg_dir = Path(__file__).resolve().parent
    yield from (
        candidate,
        pkg_dir.parent / candidate,
        pkg_dir / candidate,
    )


def _resolve_spec_path(path: str | Path) -> Path:
    """Pick the first existing spec from candidate locations."""
    return next((p for p in _spec_path_candidates(path) if p.exists()), Path(path))


def _format_timings(timings: Mapping[str, float]) -> str:
    """Return ``timings`` as newline-delimited ``name: seconds`` strings."""
    return "\n".join(f"{n}: {t:.4f}s" for n, t in timings.items())


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        _exit_with_error(exc)


def _cli_overrides(
    keep_blank_lines: bool,
    trim: str | None,
    flatten: bool,
) -> dict[str, dict[str, Any]]:
    whitespace_opts: dict[str, Any] = {"collapse_blank_lines": False} if keep_blank_lines else {}
    filter_opts: dict[str, Any] = {
        k: v
        for k, v in {
            "final_trim": trim,
            "flatten_newlines": True if flatten else None,
        }.items()
        if v is not None
    }
    return {
        k: v
        for k, v in {
            "normalize_whitespace": whitespace_opts,
            "filter_special_chars": filter_opts,
        }.items()
        if v
    }


def _load(spec: str, keep_blank_lines: bool, trim: str | None, flatten: bool) -> PipelineSpec:
    loaded = load_spec(
        _resolve_spec_path(spec),
        overrides=_cli_overrides(keep_blank_lines, trim, flatten),
    )
    # reject a bad pipeline up front, even when the input turns out blank
    configured_passes(loaded)
    return loaded


def _run_clean(
    input_path: Path | None,
    out: Path | None,
    spec: PipelineSpec,
    verbose: bool,
) -> None:
    cleaned, timings, rounds = clean_with_timings(io_text.read(input_path), spec)
    io_text.write(cleaned, out)
    if verbose:
        print(_format_timings(timings), file=sys.stderr)
        print(f"rounds: {rounds}", file=sys.stderr)


def _run_batch(
    input_path: Path,
    out: Path | None,
    field: str,
    spec: PipelineSpec,
    verbose: bool,
) -> None:
    rows = jsonl.clean_rows(
        jsonl.read_rows(input_path), field, lambda v: clean_with_timings(v, spec)[0]
    )
    count = jsonl.write_rows(rows, out)
    if verbose:
        print(f"rows: {count}", file=sys.stderr)


app = typer.Typer(add_completion=False, no_args_is_help=True)

_LOG_LEVEL_DEFAULT = os.getenv("TEXT_CLEANUP_LOG_LEVEL", "WARNING")


@app.command("clean")
def clean_command(  # pragma: no cover - exercised in CLI tests
    input_path: Path | None = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Text file to clean; stdin when omitted.",
    ),
    out: Path | None = typer.Option(None, "--out", help="Write here instead of stdout."),
    spec: str = typer.Option("cleanup.yaml", "--spec"),
    keep_blank_lines: bool = typer.Option(False, "--keep-blank-lines"),
    trim: str | None = typer.Option(None, "--trim", help="per-line or full"),
    flatten: bool = typer.Option(False, "--flatten", help="Join all lines with spaces."),
    verbose: bool = typer.Option(False, "--verbose"),
    log_level: str = typer.Option(_LOG_LEVEL_DEFAULT, "--log-level"),
) -> None:
    _configure_logging(log_level)
    _safe(
        lambda: _run_clean(
            input_path,
            out,
            _load(spec, keep_blank_lines, trim, flatten),
            verbose,
        )
    )


@app.command("batch")
def batch_command(  # pragma: no cover - exercised in CLI tests
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    out: Path | None = typer.Option(None, "--out"),
    field: str = typer.Option("text", "--field", help="JSON key holding the text."),
    spec: str = typer.Option("cleanup.yaml", "--spec"),
    keep_blank_lines: bool = typer.Option(False, "--keep-blank-lines"),
    trim: str | None = typer.Option(None, "--trim"),
    flatten: bool = typer.Option(False, "--flatten"),
    verbose: bool = typer.Option(False, "--verbose"),
    log_level: str = typer.Option(_LOG_LEVEL_DEFAULT, "--log-level"),
) -> None:
    _configure_logging(log_level)
    _safe(
        lambda: _run_batch(
            input_path,
            out,
            field,
            _load(spec, keep_blank_lines, trim, flatten),
            verbose,
        )
    )


@app.command()
def inspect() -> None:  # pragma: no cover - exercised in tests
    print(json.dumps(run_inspect(), indent=2))


if __name__ == "__main__":
    app()
