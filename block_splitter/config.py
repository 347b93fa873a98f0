from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from typing import Any, Dict, Iterable, Mapping, List

import yaml
from pydantic import BaseModel, Field

from block_splitter.errors import InvalidConfiguration

DEFAULT_PIPELINE: tuple[str, ...] = (
    "normalize_newlines",
    "segment",
    "classify",
    "assemble_blocks",
)


class PipelineSpec(BaseModel):
    """Pass names to run, in order, and per-pass options."""

    pipeline: List[str] = Field(default_factory=lambda: list(DEFAULT_PIPELINE))
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Parse the YAML mapping at ``path``; a missing file means no settings."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(f"{p}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration("pipeline.yaml must contain a top-level mapping")
    return data


# options read verbatim from the environment, never YAML-coerced
_RAW_KEYS: frozenset[tuple[str, str]] = frozenset({("classify", "marker")})


def _coerce(step: str, key: str, value: str) -> Any:
    """YAML-coerce an environment value, keeping the raw string on failure."""
    if (step, key) in _RAW_KEYS:
        return value
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def _env_overrides(steps: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """
    Map STEP__key=value -> options[step][key]=value (step/key lower-cased).
    Only variables naming a known step are considered.
    """
    known = set(steps)
    out: Dict[str, Dict[str, Any]] = {}
    for k, v in os.environ.items():
        if "__" not in k:
            continue
        step, key = k.lower().split("__", 1)
        if step not in known:
            continue
        out.setdefault(step, {})[key] = _coerce(step, key, v)
    return out


def _merge_options(
    base: Dict[str, Dict[str, Any]], override: Dict[str, Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    """Merge per-pass option dicts key by key; ``override`` wins."""
    sources = set(base) | set(override)
    return {s: {**base.get(s, {}), **override.get(s, {})} for s in sources}


def _warn_unknown_options(pipeline: Iterable[str], opts: Mapping[str, Any]) -> None:
    """Warn about option sections that no pipeline step will read."""

    unknown = [step for step in opts if step not in pipeline]
    if unknown:
        warnings.warn(
            f"Unknown pipeline options: {', '.join(sorted(unknown))}",
            stacklevel=2,
        )


def load_spec(
    path: str | os.PathLike | None = "pipeline.yaml",
    overrides: Dict[str, Dict[str, Any]] | None = None,
) -> PipelineSpec:
    """Build a spec from YAML, then ``STEP__key`` env vars, then ``overrides``."""
    data = _read_yaml(path)
    pipeline = data.get("pipeline") or list(DEFAULT_PIPELINE)
    opts = data.get("options") or {}
    sources: Iterable[Dict[str, Dict[str, Any]]] = (
        d for d in (opts, _env_overrides(pipeline), overrides) if d
    )
    acc: Dict[str, Dict[str, Any]] = {}
    merged = reduce(_merge_options, sources, acc)

    _warn_unknown_options(pipeline, merged)
    return PipelineSpec.model_validate({**data, "pipeline": pipeline, "options": merged})
