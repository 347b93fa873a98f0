"""Marker-driven block classification.

Categories follow a one-way state machine: ``NORMAL`` until the first
chunk that contains the marker (``MARKER_FIRST``), then ``AFTER_MARKER``
for every chunk that follows, whatever its content.  Detection looks at
one chunk at a time, so a marker cut in half by a hard break is missed.
"""

from __future__ import annotations

from enum import Enum
from functools import reduce
from typing import Iterable, NamedTuple


class BlockCategory(str, Enum):
    """Classification attached to every emitted block."""

    NORMAL = "NORMAL"
    MARKER_FIRST = "MARKER_FIRST"
    AFTER_MARKER = "AFTER_MARKER"


class _Fold(NamedTuple):
    categories: tuple[BlockCategory, ...]
    marker_seen: bool


def classify_one(content: str, marker: str, marker_seen: bool) -> tuple[BlockCategory, bool]:
    """Return the category of ``content`` and the updated ``marker_seen`` flag."""

    if marker_seen:
        return BlockCategory.AFTER_MARKER, True
    if marker in content:
        return BlockCategory.MARKER_FIRST, True
    return BlockCategory.NORMAL, False


def _step(acc: _Fold, content: str, marker: str) -> _Fold:
    category, seen = classify_one(content, marker, acc.marker_seen)
    return _Fold((*acc.categories, category), seen)


def classify(contents: Iterable[str], marker: str) -> list[BlockCategory]:
    """Classify ``contents`` in order, threading the flag through a fold."""

    initial = _Fold((), False)
    folded = reduce(lambda acc, c: _step(acc, c, marker), contents, initial)
    return list(folded.categories)


def marker_index(categories: Iterable[BlockCategory]) -> int | None:
    """Index of the ``MARKER_FIRST`` entry, or ``None`` when never triggered."""

    return next(
        (i for i, c in enumerate(categories) if c is BlockCategory.MARKER_FIRST),
        None,
    )


__all__ = ["BlockCategory", "classify", "classify_one", "marker_index"]
