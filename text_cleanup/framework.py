"""Pass registry and the artifact handed from one cleaning stage to the next."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Protocol, Type, runtime_checkable


@dataclass(frozen=True)
class Artifact:
    """Immutable carrier of text + metadata between passes."""

    payload: Any
    meta: Dict[str, Any] | None = None

    @property
    def text(self) -> str | None:
        return self.payload if isinstance(self.payload, str) else None

    def with_text(self, pass_name: str, cleaned: str) -> Artifact:
        """Return a new artifact holding ``cleaned`` plus length metrics for ``pass_name``."""
        before = self.text or ""
        meta = dict(self.meta or {})
        metrics = dict(meta.get("metrics") or {})
        metrics[pass_name] = {"chars_in": len(before), "chars_out": len(cleaned)}
        return Artifact(payload=cleaned, meta={**meta, "metrics": metrics})


@runtime_checkable
class Pass(Protocol):
    name: str
    input_type: Type
    output_type: Type

    def __call__(self, a: Artifact) -> Artifact:
        """Execute the pass."""
        ...


_REGISTRY: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    """Register a pass by name; re-registering the same name replaces it."""
    global _REGISTRY
    _REGISTRY = MappingProxyType({**_REGISTRY, p.name: p})
    return p


def lookup(name: str) -> Pass:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"unknown pass: {name!r}") from None


def run_step(name: str, a: Artifact) -> Artifact:
    return lookup(name)(a)


def run_pipeline(steps: Iterable[str], a: Artifact) -> Artifact:
    """Apply registered steps once, in order."""
    return reduce(lambda acc, name: run_step(name, acc), steps, a)


def registry() -> Dict[str, Pass]:
    """Shallow copy of the registry for inspection/testing."""
    return dict(_REGISTRY)
