"""Plain-text presentation of a segmentation result."""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

from block_splitter.blocks import Block, SegmentationResult
from block_splitter.classifier import BlockCategory

_SUFFIX: Mapping[BlockCategory, str] = {
    BlockCategory.NORMAL: "",
    BlockCategory.MARKER_FIRST: " [marker]",
    BlockCategory.AFTER_MARKER: " [after marker]",
}

Styler = Callable[[str, BlockCategory], str]


def _plain(label: str, _category: BlockCategory) -> str:
    return label


def block_label(position: int, block: Block) -> str:
    """``Block n`` plus a category suffix; ``position`` is 1-based."""
    return f"Block {position}{_SUFFIX[block.category]} ({len(block.content)} chars)"


def iter_rendered(result: SegmentationResult, style: Styler = _plain) -> Iterator[str]:
    """Yield a summary line, then a label and the content of every block."""
    yield f"{result.total_characters} characters, {result.block_count} blocks"
    for position, block in enumerate(result.blocks, 1):
        yield ""
        yield style(block_label(position, block), block.category)
        yield block.content


def render_blocks(result: SegmentationResult, style: Styler = _plain) -> str:
    return "\n".join(iter_rendered(result, style))
