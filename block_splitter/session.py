"""Interactive state kept around the core: current blocks and active copy.

The session owns what a front end needs between user actions.  Loading a
new document replaces the result only when extraction succeeds, and a
failed copy leaves the active block as it was.  Failures are reported as
non-fatal notifications through logging and ``last_error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from block_splitter.adapters import read_document
from block_splitter.adapters.clipboard import ClipboardSink
from block_splitter.blocks import EMPTY_RESULT, SegmentationResult, clock_token
from block_splitter.core import segment_text
from block_splitter.errors import ClipboardError, ExtractionError
from block_splitter.options import SplitOptions

logger = logging.getLogger(__name__)


@dataclass
class SplitterSession:
    options: SplitOptions = field(default_factory=SplitOptions)
    token_factory: Callable[[], str] = clock_token
    result: SegmentationResult = EMPTY_RESULT
    active_block_index: int | None = None
    last_error: str | None = None

    def load_text(self, text: str) -> SegmentationResult:
        """Segment ``text`` and make it the current result."""
        self.result = segment_text(text, self.options, token=self.token_factory())
        self.active_block_index = None
        self.last_error = None
        logger.debug("session: loaded %d blocks", self.result.block_count)
        return self.result

    def load_document(self, path: str) -> bool:
        """Extract and segment ``path``; keep the previous result on failure."""
        try:
            text = read_document(path)
        except ExtractionError as exc:
            self.last_error = str(exc)
            logger.warning("Error processing %s: %s", path, exc)
            return False
        self.load_text(text)
        return True

    def copy_block(self, index: int, sink: ClipboardSink) -> bool:
        """Send block ``index`` (0-based) to ``sink`` and mark it active."""
        if not 0 <= index < self.result.block_count:
            return False
        try:
            sink.write_text(self.result.blocks[index].content)
        except ClipboardError as exc:
            self.last_error = str(exc)
            logger.warning("Copy failed: %s", exc)
            return False
        self.active_block_index = index
        return True

    def reset(self) -> None:
        self.result = EMPTY_RESULT
        self.active_block_index = None
        self.last_error = None
