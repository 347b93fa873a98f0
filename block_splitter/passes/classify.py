"""Classification pass: annotates a ``chunks`` payload with categories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from block_splitter.classifier import classify as classify_contents, marker_index
from block_splitter.framework import Artifact, pass_options, register, with_metrics
from block_splitter.options import DEFAULT_MARKER, SplitOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ClassifyPass:
    name: str = field(default="classify", init=False)
    input_type: type = field(default=dict, init=False)
    output_type: type = field(default=dict, init=False)
    marker: str = DEFAULT_MARKER

    def __post_init__(self) -> None:
        SplitOptions(marker=self.marker)

    def with_meta(self, meta: dict[str, Any] | None) -> _ClassifyPass:
        opts = pass_options(meta, self.name)
        if "marker" not in opts:
            return self
        return replace(self, marker=opts["marker"])

    def __call__(self, a: Artifact) -> Artifact:
        doc = a.payload
        if not isinstance(doc, dict) or doc.get("type") != "chunks":
            return a

        marker = self.with_meta(a.meta).marker
        categories = classify_contents((c.content for c in doc["chunks"]), marker)
        first = marker_index(categories)
        if first is None:
            logger.debug("classify: marker %r not found in %d chunks", marker, len(categories))
        else:
            logger.debug("classify: marker %r first seen in chunk %d", marker, first)
        meta = with_metrics(a.meta, self.name, {"marker_index": first})
        return Artifact(payload={**doc, "categories": categories}, meta=meta)


classify = register(_ClassifyPass())
