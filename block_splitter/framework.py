"""Pass registry and the artifact that flows between passes."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Protocol, Type, runtime_checkable


@dataclass(frozen=True)
class Artifact:
    """Payload plus run metadata (options, metrics, run token) handed along the pipeline."""

    payload: Any
    meta: Dict[str, Any] | None = None


@runtime_checkable
class Pass(Protocol):
    name: str
    input_type: Type
    output_type: Type

    def __call__(self, a: Artifact) -> Artifact:
        """Return a new artifact; payloads of the wrong shape pass through untouched."""
        ...


_PASSES: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    """Add ``p`` under ``p.name``, replacing any pass of the same name."""
    global _PASSES
    _PASSES = MappingProxyType({**_PASSES, p.name: p})
    return p


def registry() -> Dict[str, Pass]:
    """Copy of the registered passes keyed by name."""
    return dict(_PASSES)


def run_step(name: str, a: Artifact) -> Artifact:
    return _PASSES[name](a)


def run_pipeline(steps: Iterable[str], a: Artifact) -> Artifact:
    """Thread ``a`` through the named passes in order."""
    return reduce(lambda acc, step: run_step(step, acc), steps, a)


def with_metrics(
    meta: Mapping[str, Any] | None, name: str, values: Mapping[str, Any]
) -> dict[str, Any]:
    """Return ``meta`` with ``values`` merged under ``metrics[name]``."""
    all_metrics = dict((meta or {}).get("metrics") or {})
    existing = all_metrics.get(name) or {}
    return {**(meta or {}), "metrics": {**all_metrics, name: {**existing, **values}}}


def pass_options(meta: Mapping[str, Any] | None, name: str) -> dict[str, Any]:
    """Return the option overrides recorded for pass ``name`` in ``meta``."""
    return dict(((meta or {}).get("options") or {}).get(name) or {})
