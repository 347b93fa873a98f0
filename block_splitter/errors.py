"""Exception hierarchy shared by the core and its adapters."""

from __future__ import annotations


class BlockSplitterError(Exception):
    """Base class for every error raised by ``block_splitter``."""


class InvalidConfiguration(BlockSplitterError, ValueError):
    """Raised at the boundary when options cannot drive a segmentation run."""


class ExtractionError(BlockSplitterError):
    """Raised when a source document cannot be turned into text."""


class ClipboardError(BlockSplitterError):
    """Raised when a sink refuses a copied block."""


__all__ = [
    "BlockSplitterError",
    "ClipboardError",
    "ExtractionError",
    "InvalidConfiguration",
]
