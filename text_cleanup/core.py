from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass, replace
from functools import lru_cache, reduce
from typing import Any

from text_cleanup.config import STAGES, CleanOptions, PipelineSpec, spec_from_options
from text_cleanup.framework import Artifact, Pass, lookup, registry

logger = logging.getLogger(__name__)


def _enforce_invariants(spec: PipelineSpec) -> list[str]:
    """Return validated steps; every stage runs, once, in canonical order."""
    regs = registry()
    unknown = [s for s in spec.pipeline if s not in regs]
    if unknown:
        raise KeyError(f"unknown steps: {unknown}")
    if tuple(spec.pipeline) != STAGES:
        raise ValueError(
            f"pipeline must be {list(STAGES)} in that order, got {list(spec.pipeline)}"
        )
    return list(spec.pipeline)


def configure_pass(pass_obj: Pass, opts: Mapping[str, Any]) -> Pass:
    """Return a new pass with ``opts`` merged without mutating ``pass_obj``."""

    if not opts or not is_dataclass(pass_obj):
        return pass_obj
    names = {f.name for f in fields(pass_obj) if f.init}
    updates = {k: v for k, v in opts.items() if k in names}
    return replace(pass_obj, **updates) if updates else pass_obj


@lru_cache(maxsize=32)
def _passes_for(options: CleanOptions) -> tuple[Pass, ...]:
    per_pass = options.pass_options()
    return tuple(configure_pass(lookup(name), per_pass.get(name, {})) for name in STAGES)


def configured_passes(spec: PipelineSpec) -> tuple[Pass, ...]:
    """Resolve ``spec`` into ready-to-run passes."""
    _enforce_invariants(spec)
    return _passes_for(spec.clean_options())


def _timed(timings: dict[str, float], a: Artifact, p: Pass) -> Artifact:
    """Run ``p`` while accumulating its execution duration."""
    t0 = time.time()
    try:
        return p(a)
    finally:
        timings[p.name] = timings.get(p.name, 0.0) + time.time() - t0


def _run_to_fixpoint(
    passes: Sequence[Pass], a: Artifact
) -> tuple[Artifact, dict[str, float], int]:
    """Repeat the full pass sequence until the payload stops changing.

    After the first round every rewrite only deletes code points, so the
    payload shrinks on each further round and the loop terminates.
    """
    timings: dict[str, float] = {}
    rounds = 0
    while True:
        before = a.payload
        a = reduce(lambda acc, p: _timed(timings, acc, p), passes, a)
        rounds += 1
        if a.payload == before:
            return a, timings, rounds
        logger.debug("round %d changed payload; repeating passes", rounds)


def run_clean(
    a: Artifact, spec: PipelineSpec | None = None
) -> tuple[Artifact, dict[str, float]]:
    """Run the cleaning passes declared in ``spec`` capturing per-pass timings."""
    passes = configured_passes(spec or PipelineSpec())
    result, timings, rounds = _run_to_fixpoint(passes, a)
    meta = dict(result.meta or {})
    meta["metrics"] = {**(meta.get("metrics") or {}), "rounds": rounds}
    return Artifact(payload=result.payload, meta=meta), timings


def clean_with_timings(
    value: Any, spec: PipelineSpec | None = None
) -> tuple[str, dict[str, float], int]:
    """Clean ``value`` under ``spec`` returning the text, per-pass timings and rounds run."""
    if not isinstance(value, str) or not value.strip():
        return "", {}, 0
    result, timings = run_clean(Artifact(payload=value), spec)
    text = result.payload
    rounds = (result.meta or {}).get("metrics", {}).get("rounds", 0)
    return (text if text.strip() else ""), timings, rounds


def clean(value: Any, options: CleanOptions | Mapping[str, Any] | None = None) -> str:
    """Return ``value`` as clean, portable plain text.

    Anything that is not a ``str``, or is empty or whitespace-only, yields
    ``""``; no input makes this raise. ``options`` selects the whitespace
    policies (see :class:`~text_cleanup.config.CleanOptions`); invalid options
    raise ``pydantic.ValidationError``.
    """
    text, _, _ = clean_with_timings(value, spec_from_options(options))
    return text


def run_inspect() -> dict[str, dict[str, str]]:
    """Return a lightweight view of the registry for CLI/tests."""
    return {
        name: {"input": str(p.input_type), "output": str(p.output_type)}
        for name, p in registry().items()
    }
