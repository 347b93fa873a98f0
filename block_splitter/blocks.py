"""Block records and the assembler that names them."""

from __future__ import annotations

import string
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from block_splitter.classifier import BlockCategory

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""

    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
        if not value:
            return "".join(reversed(digits))


def clock_token(clock: Callable[[], float] = time.time) -> str:
    """Return a run token from ``clock`` milliseconds, base-36 encoded."""

    return to_base36(int(clock() * 1000))


def block_id(token: str, index: int, length: int) -> str:
    """Identifier unique within one run: token, sequence index and length."""

    return f"block-{token}-{index}-{length}"


@dataclass(frozen=True)
class Block:
    """One classified, length-bounded slice of the normalized text."""

    id: str
    content: str
    category: BlockCategory

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "content": self.content, "category": self.category.value}


@dataclass(frozen=True)
class SegmentationResult:
    """Immutable snapshot handed to downstream consumers."""

    blocks: tuple[Block, ...]
    total_characters: int

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def contents(self) -> list[str]:
        return [b.content for b in self.blocks]

    def categories(self) -> list[BlockCategory]:
        return [b.category for b in self.blocks]


EMPTY_RESULT = SegmentationResult(blocks=(), total_characters=0)


def assemble(
    contents: Iterable[str],
    categories: Sequence[BlockCategory],
    token: str,
) -> tuple[Block, ...]:
    """Pair each classified chunk with its identifier, preserving order."""

    return tuple(
        Block(block_id(token, i, len(content)), content, category)
        for i, (content, category) in enumerate(zip(contents, categories, strict=True))
    )


__all__ = [
    "Block",
    "EMPTY_RESULT",
    "SegmentationResult",
    "assemble",
    "block_id",
    "clock_token",
    "to_base36",
]
