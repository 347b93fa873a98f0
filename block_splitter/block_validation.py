from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from block_splitter.blocks import Block
from block_splitter.classifier import BlockCategory
from block_splitter.options import SplitOptions
from block_splitter.text_normalize import LINE_BREAK, normalize_line_endings

_CATEGORY_CODES = {
    BlockCategory.NORMAL: "N",
    BlockCategory.MARKER_FIRST: "M",
    BlockCategory.AFTER_MARKER: "A",
}
_CATEGORY_ORDER = re.compile(r"N*(?:MA*)?")


@dataclass(frozen=True)
class ValidationReport:
    """Structured result from :func:`validate_blocks`.

    ``coverage_valid`` is ``True`` when walking the blocks over the
    normalized text, skipping one line break after a block wherever one
    sits, consumes the text exactly.
    """

    total_blocks: int
    empty_blocks: int
    overlong: int
    category_order_valid: bool
    coverage_valid: bool

    def has_issues(self) -> bool:
        """Return ``True`` if any invariant is violated."""

        return bool(self.empty_blocks or self.overlong) or not (
            self.category_order_valid and self.coverage_valid
        )


def _category_order_valid(categories: Sequence[BlockCategory]) -> bool:
    codes = "".join(_CATEGORY_CODES[c] for c in categories)
    return _CATEGORY_ORDER.fullmatch(codes) is not None


def _coverage_valid(contents: Sequence[str], normalized: str) -> bool:
    pos = 0
    for content in contents:
        if not normalized.startswith(content, pos):
            return False
        pos += len(content)
        if normalized.startswith(LINE_BREAK, pos):
            pos += 1
    return pos == len(normalized)


def validate_blocks(
    blocks: Sequence[Block], text: str, options: SplitOptions | None = None
) -> ValidationReport:
    """Check ``blocks`` produced from ``text`` against the segmentation invariants."""

    opts = options or SplitOptions()
    contents = [b.content for b in blocks]
    return ValidationReport(
        total_blocks=len(blocks),
        empty_blocks=sum(1 for c in contents if not c),
        overlong=sum(1 for c in contents if len(c) > opts.max_chunk_length),
        category_order_valid=_category_order_valid([b.category for b in blocks]),
        coverage_valid=_coverage_valid(contents, normalize_line_endings(text)),
    )


__all__ = ["ValidationReport", "validate_blocks"]
