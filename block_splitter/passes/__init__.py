"""Core passes; importing this package registers them in pipeline order."""

from .normalize_newlines import normalize_newlines
from .segment import segment
from .classify import classify
from .assemble_blocks import assemble_blocks

__all__ = ["normalize_newlines", "segment", "classify", "assemble_blocks"]
