from collections.abc import Callable
from functools import reduce

import pytest

from text_cleanup.config import STAGES, PipelineSpec
from text_cleanup.core import _enforce_invariants, clean_with_timings


def _add(step: str) -> Callable[[PipelineSpec], PipelineSpec]:
    return lambda spec: PipelineSpec(pipeline=[*spec.pipeline, step])


def _build_pipeline(*steps: str) -> PipelineSpec:
    return reduce(lambda spec, s: _add(s)(spec), steps, PipelineSpec(pipeline=[]))


def test_valid_pipeline() -> None:
    assert _enforce_invariants(_build_pipeline(*STAGES)) == list(STAGES)


def test_unknown_step_rejected() -> None:
    spec = _build_pipeline(*STAGES, "bogus")
    with pytest.raises(KeyError, match="bogus"):
        _enforce_invariants(spec)


def test_reordered_stages_rejected() -> None:
    spec = _build_pipeline(*reversed(STAGES))
    with pytest.raises(ValueError, match="in that order"):
        _enforce_invariants(spec)


def test_missing_stage_rejected() -> None:
    spec = _build_pipeline(*STAGES[:-1])
    with pytest.raises(ValueError):
        _enforce_invariants(spec)


def test_duplicate_stage_rejected() -> None:
    spec = _build_pipeline(*STAGES, STAGES[0])
    with pytest.raises(ValueError):
        _enforce_invariants(spec)


def test_clean_with_bad_pipeline_raises() -> None:
    with pytest.raises(ValueError):
        clean_with_timings("text", _build_pipeline(*STAGES[:2]))
