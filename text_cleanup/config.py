from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from importlib import import_module
from typing import Any, Dict, Iterable, List, Literal, Mapping, Tuple, cast

from pydantic import BaseModel, ConfigDict, Field

yaml = cast(Any, import_module("yaml"))

ENV_PREFIX = "TEXT_CLEANUP_"

STAGES: Tuple[str, ...] = (
    "strip_hidden_chars",
    "normalize_whitespace",
    "strip_formatting",
    "filter_special_chars",
)

# option name -> pass that consumes it
_OPTION_OWNERS: Mapping[str, str] = {
    "collapse_blank_lines": "normalize_whitespace",
    "final_trim": "filter_special_chars",
    "flatten_newlines": "filter_special_chars",
}


class CleanOptions(BaseModel):
    """Whitespace policies callers may choose between.

    The defaults cap blank lines at one and trim the whole result; the
    alternative (``collapse_blank_lines=False, final_trim="per-line"``) keeps
    every blank line and only trims line edges.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    collapse_blank_lines: bool = True
    final_trim: Literal["per-line", "full"] = "full"
    flatten_newlines: bool = False

    def pass_options(self) -> Dict[str, Dict[str, Any]]:
        """Group option values under the pass that owns them."""
        grouped: Dict[str, Dict[str, Any]] = {}
        for key, value in self.model_dump().items():
            grouped.setdefault(_OPTION_OWNERS[key], {})[key] = value
        return grouped


class PipelineSpec(BaseModel):
    """Declarative pipeline specification."""

    pipeline: List[str] = Field(default_factory=lambda: list(STAGES))
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def clean_options(self) -> CleanOptions:
        """Validate the owned pass options into :class:`CleanOptions`."""
        picked = {
            key: self.options[owner][key]
            for key, owner in _OPTION_OWNERS.items()
            if key in self.options.get(owner, {})
        }
        return CleanOptions.model_validate(picked)


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError(f"{p.name} must contain a top-level mapping")
    return data


def _coerce(raw: str) -> Any:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def _env_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Dict[str, Any]]:
    """
    Map TEXT_CLEANUP_STEP__key=value -> options[step][key]=value (lower-cased).
    Values are YAML-coerced (so 'false', 'per-line' become bool/str).
    """
    out: Dict[str, Dict[str, Any]] = {}
    env = os.environ if environ is None else environ
    for k, v in env.items():
        if not k.startswith(ENV_PREFIX) or "__" not in k:
            continue
        step, key = k[len(ENV_PREFIX) :].lower().split("__", 1)
        out.setdefault(step, {})[key] = _coerce(v)
    return out


def _merge_options(
    base: Dict[str, Dict[str, Any]], override: Dict[str, Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    """Shallow-merge per-step options; override wins."""
    sources = set(base) | set(override)
    return {s: {**base.get(s, {}), **override.get(s, {})} for s in sources}


def _warn_unknown_options(pipeline: Iterable[str], opts: Mapping[str, Any]) -> None:
    """Emit a warning when options contain steps absent from the pipeline."""

    unknown = [step for step in opts if step not in pipeline]
    if unknown:
        warnings.warn(
            f"Unknown pipeline options: {', '.join(sorted(unknown))}",
            stacklevel=2,
        )


def load_spec(
    path: str | os.PathLike | None = "cleanup.yaml",
    overrides: Dict[str, Dict[str, Any]] | None = None,
) -> PipelineSpec:
    """Load YAML + env/CLI overrides into a validated PipelineSpec."""
    data = _read_yaml(path)
    sources: Iterable[Dict[str, Dict[str, Any]]] = (
        d for d in (data.get("options") or {}, _env_overrides(), overrides) if d
    )
    acc: Dict[str, Dict[str, Any]] = {}
    merged = reduce(_merge_options, sources, acc)

    pipeline = data.get("pipeline") or list(STAGES)
    _warn_unknown_options(pipeline, merged)
    spec = PipelineSpec.model_validate({**data, "pipeline": pipeline, "options": merged})
    spec.clean_options()
    return spec


def spec_from_options(options: CleanOptions | Mapping[str, Any] | None = None) -> PipelineSpec:
    """Build the default pipeline spec carrying ``options``."""
    resolved = (
        options
        if isinstance(options, CleanOptions)
        else CleanOptions.model_validate(dict(options or {}))
    )
    return PipelineSpec(options=resolved.pass_options())
