from __future__ import annotations

import logging

from block_splitter.framework import Artifact, register, with_metrics
from block_splitter.text_normalize import count_crlf, normalize_line_endings

logger = logging.getLogger(__name__)


class _NormalizeNewlinesPass:
    name = "normalize_newlines"
    input_type = str
    output_type = str

    def __call__(self, a: Artifact) -> Artifact:
        text = a.payload
        if not isinstance(text, str):
            return a

        replaced = count_crlf(text)
        logger.debug("normalize_newlines: %d CRLF pairs rewritten", replaced)
        meta = with_metrics(a.meta, self.name, {"replaced": replaced})
        meta.setdefault("source_characters", len(text))
        return Artifact(payload=normalize_line_endings(text), meta=meta)


normalize_newlines = register(_NormalizeNewlinesPass())
