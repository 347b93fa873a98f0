from __future__ import annotations

import json
import logging
import platform
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass, replace
from functools import reduce
from importlib import metadata
from pathlib import Path
from typing import Any, Final

from block_splitter.blocks import SegmentationResult
from block_splitter.config import PipelineSpec
from block_splitter.errors import InvalidConfiguration
from block_splitter.framework import Artifact, Pass, registry
from block_splitter.options import SplitOptions

logger = logging.getLogger(__name__)

# step -> step that must run somewhere before it
_PREREQUISITES: Final[Mapping[str, str]] = {
    "segment": "normalize_newlines",
    "classify": "segment",
    "assemble_blocks": "classify",
}


def _pass_steps(spec: PipelineSpec) -> list[str]:
    """Return pipeline steps; error on unregistered ones."""
    regs = registry()
    unknown = [s for s in spec.pipeline if s not in regs]
    if unknown:
        raise InvalidConfiguration(f"unknown steps: {unknown}")
    return list(spec.pipeline)


def _ensure_prerequisites(steps: Sequence[str]) -> None:
    """Raise when a step is missing the step it consumes, or runs before it."""
    positions = {s: i for i, s in enumerate(steps)}
    for step, needed in _PREREQUISITES.items():
        if step not in positions:
            continue
        if positions.get(needed, len(steps)) > positions[step]:
            raise InvalidConfiguration(f"{step} requires {needed} to run beforehand")


def _enforce_invariants(spec: PipelineSpec) -> list[str]:
    """Return validated steps while enforcing pass order."""
    steps = _pass_steps(spec)
    _ensure_prerequisites(steps)
    return steps


def configure_pass(pass_obj: Pass, opts: Mapping[str, Any]) -> Pass:
    """Return a new pass with ``opts`` merged without mutating ``pass_obj``."""

    if not opts or not is_dataclass(pass_obj):
        return pass_obj
    names = {f.name for f in fields(pass_obj) if f.init}
    updates = {k: opts[k] for k in opts if k in names}
    return replace(pass_obj, **updates) if updates else pass_obj


def _timed(p: Pass, a: Artifact, timings: dict[str, float]) -> Artifact:
    """Run ``p`` while recording its execution duration."""
    t0 = time.time()
    try:
        return p(a)
    finally:
        timings[p.name] = time.time() - t0


def _configured_passes(spec: PipelineSpec) -> list[Pass]:
    steps = _enforce_invariants(spec)
    # options are checked as a whole before the first pass
    SplitOptions.from_pass_options(spec.options)
    return [configure_pass(registry()[s], spec.options.get(s, {})) for s in steps]


def _input_artifact(
    text: str, spec: PipelineSpec, token: str | None, source: str | None
) -> Artifact:
    meta: dict[str, Any] = {"metrics": {}, "options": dict(spec.options), "input": source}
    if token is not None:
        meta["run_token"] = token
    return Artifact(payload=text, meta=meta)


def run_split(
    text: str,
    spec: PipelineSpec | None = None,
    *,
    token: str | None = None,
    source: str | None = None,
) -> tuple[Artifact, dict[str, float]]:
    """Run declared passes over ``text`` and return the artifact plus timings."""
    spec = spec or PipelineSpec()
    passes = _configured_passes(spec)
    logger.debug("run_split: %s", " -> ".join(p.name for p in passes))
    timings: dict[str, float] = {}
    seed = _input_artifact(text, spec, token, source)
    a = reduce(lambda acc, p: _timed(p, acc, timings), passes, seed)
    return a, timings


def segment_text(
    text: str,
    options: SplitOptions | None = None,
    *,
    token: str | None = None,
) -> SegmentationResult:
    """Normalize, segment, classify and assemble ``text`` in one call.

    ``token`` fixes the run-scoped part of block identifiers; when omitted
    it is derived from the wall clock.
    """
    opts = options or SplitOptions()
    spec = PipelineSpec(options=opts.as_pass_options())
    artifact, _ = run_split(text, spec, token=token)
    result = artifact.payload
    if not isinstance(result, SegmentationResult):
        raise InvalidConfiguration("pipeline did not produce blocks")
    return result


# --- run report helpers ----------------------------------------------------


def _dependency_versions() -> dict[str, Any]:
    names = ("pydantic", "PyYAML", "typer", "python-docx", "lxml")

    def version(n: str) -> Any:
        try:
            return metadata.version(n)
        except metadata.PackageNotFoundError:
            return None

    return {n: version(n) for n in names}


def _env_snapshot() -> dict[str, Any]:
    return {
        "sys_version": sys.version,
        "platform": platform.platform(),
        "dependencies": _dependency_versions(),
    }


def assemble_report(
    timings: Mapping[str, float],
    meta: Mapping[str, Any],
) -> dict[str, Any]:
    """Purely assemble run report data without performing IO."""
    metrics = dict(meta.get("metrics") or {})
    return {
        "timings": dict(timings),
        "metrics": {**metrics, "env": _env_snapshot()},
        "options": dict(meta.get("options") or {}),
        "input": meta.get("input"),
    }


def write_run_report(path: str | Path, report: Mapping[str, Any]) -> None:
    """Write ``report`` as JSON to ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")


def run_inspect() -> dict[str, dict[str, str]]:
    """Return a lightweight view of the registry for CLI/tests."""
    return {
        name: {"input": str(p.input_type), "output": str(p.output_type)}
        for name, p in registry().items()
    }
