"""Length-bounded segmentation with line-boundary backoff.

The walk starts at offset ``0`` and, for each chunk, looks at the window
``[pos, pos + max_chunk_length]``.  When the window reaches the end of the
text the remainder becomes the terminal chunk.  Otherwise the last line
break inside the window (the window end included) becomes a *soft* break,
provided it lies strictly after ``pos``; failing that the chunk is cut at
exactly ``max_chunk_length`` characters (a *hard* break).  A line break
sitting at the boundary is swallowed: it belongs to neither neighbour.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence

from block_splitter.text_normalize import LINE_BREAK


class BreakKind(Enum):
    """How a chunk boundary was chosen."""

    SOFT = "soft"
    HARD = "hard"
    END = "end"


@dataclass(frozen=True)
class Chunk:
    """A raw slice ``text[start:end]`` of the normalized input.

    ``swallowed`` is ``True`` when the line break at ``end`` was consumed
    as a separator and must be reinserted to rebuild the text.
    """

    start: int
    end: int
    content: str
    kind: BreakKind
    swallowed: bool = False

    def __len__(self) -> int:
        return self.end - self.start


def _boundary(text: str, pos: int, max_chunk_length: int) -> tuple[int, BreakKind]:
    """Return the exclusive end offset of the chunk starting at ``pos``."""

    tentative = pos + max_chunk_length
    if tentative >= len(text):
        return len(text), BreakKind.END
    last_break = text.rfind(LINE_BREAK, pos + 1, tentative + 1)
    if last_break > pos:
        return last_break, BreakKind.SOFT
    return tentative, BreakKind.HARD


def iter_chunks(text: str, max_chunk_length: int) -> Iterator[Chunk]:
    """Yield chunks of ``text`` left to right until it is consumed.

    ``max_chunk_length`` must be at least 1; callers validate it through
    :class:`block_splitter.options.SplitOptions`.
    """

    pos = 0
    while pos < len(text):
        end, kind = _boundary(text, pos, max_chunk_length)
        swallowed = text.startswith(LINE_BREAK, end)
        yield Chunk(pos, end, text[pos:end], kind, swallowed)
        pos = end + 1 if swallowed else end


def split_chunks(text: str, max_chunk_length: int) -> list[Chunk]:
    """Materialized :func:`iter_chunks`."""

    return list(iter_chunks(text, max_chunk_length))


def reassemble(chunks: Iterable[Chunk]) -> str:
    """Rebuild the normalized text, reinserting every swallowed separator."""

    return "".join(c.content + (LINE_BREAK if c.swallowed else "") for c in chunks)


def break_counts(chunks: Sequence[Chunk]) -> dict[str, int]:
    """Tally soft and hard breaks for pass metrics."""

    return {
        "soft_breaks": sum(1 for c in chunks if c.kind is BreakKind.SOFT),
        "hard_breaks": sum(1 for c in chunks if c.kind is BreakKind.HARD),
    }


__all__ = [
    "BreakKind",
    "Chunk",
    "break_counts",
    "iter_chunks",
    "reassemble",
    "split_chunks",
]
