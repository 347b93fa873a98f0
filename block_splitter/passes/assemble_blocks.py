"""Final pass: pairs classified chunks with run-scoped identifiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from block_splitter.blocks import SegmentationResult, assemble, clock_token
from block_splitter.framework import Artifact, register, with_metrics

logger = logging.getLogger(__name__)


def _run_token(meta: Mapping[str, Any] | None, fallback: str | None) -> str:
    """Prefer an injected ``run_token`` in ``meta``; otherwise read the clock."""

    token = (meta or {}).get("run_token") or fallback
    return str(token) if token else clock_token()


@dataclass(frozen=True)
class _AssembleBlocksPass:
    name: str = field(default="assemble_blocks", init=False)
    input_type: type = field(default=dict, init=False)
    output_type: type = field(default=SegmentationResult, init=False)
    token: str | None = None

    def __call__(self, a: Artifact) -> Artifact:
        doc = a.payload
        if not isinstance(doc, dict) or "categories" not in doc:
            return a

        token = _run_token(a.meta, self.token)
        contents = [c.content for c in doc["chunks"]]
        blocks = assemble(contents, doc["categories"], token)
        total = (a.meta or {}).get("source_characters", len(doc.get("text", "")))
        result = SegmentationResult(blocks=blocks, total_characters=total)
        logger.debug("assemble_blocks: %d blocks, %d characters", result.block_count, total)
        meta = with_metrics(
            {**(a.meta or {}), "run_token": token},
            self.name,
            {"blocks": result.block_count, "total_characters": total},
        )
        return Artifact(payload=result, meta=meta)


assemble_blocks = register(_AssembleBlocksPass())
