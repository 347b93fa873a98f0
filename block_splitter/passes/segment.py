"""Segmentation pass: ``str`` -> ``{"type": "chunks", ...}``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from block_splitter.framework import Artifact, pass_options, register, with_metrics
from block_splitter.options import DEFAULT_MAX_CHUNK_LENGTH, SplitOptions
from block_splitter.segmenter import break_counts, split_chunks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SegmentPass:
    name: str = field(default="segment", init=False)
    input_type: type = field(default=str, init=False)
    output_type: type = field(default=dict, init=False)  # {"type": "chunks", "text", "chunks"}
    max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH

    def __post_init__(self) -> None:
        SplitOptions(max_chunk_length=self.max_chunk_length)

    def with_meta(self, meta: dict[str, Any] | None) -> _SegmentPass:
        """Return a copy honoring ``options.segment`` recorded in ``meta``."""

        opts = pass_options(meta, self.name)
        if "max_chunk_length" not in opts:
            return self
        return replace(self, max_chunk_length=opts["max_chunk_length"])

    def __call__(self, a: Artifact) -> Artifact:
        text = a.payload
        if not isinstance(text, str):
            return a

        limit = self.with_meta(a.meta).max_chunk_length
        chunks = split_chunks(text, limit)
        counts = break_counts(chunks)
        logger.debug(
            "segment: %d chunks (%d soft, %d hard) at limit %d",
            len(chunks),
            counts["soft_breaks"],
            counts["hard_breaks"],
            limit,
        )
        meta = with_metrics(a.meta, self.name, {"chunks": len(chunks), **counts})
        return Artifact(
            payload={"type": "chunks", "text": text, "chunks": chunks},
            meta=meta,
        )


segment = register(_SegmentPass())
