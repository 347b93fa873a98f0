"""Sinks that receive a copied block."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable

from block_splitter.errors import ClipboardError


@runtime_checkable
class ClipboardSink(Protocol):
    def write_text(self, text: str) -> None:
        """Place ``text`` in the sink or raise :class:`ClipboardError`."""
        ...


class StreamSink:
    """Writes copied text to a stream, ``sys.stdout`` by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write_text(self, text: str) -> None:
        stream = self._stream or sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as exc:
            raise ClipboardError(f"copy failed: {exc}") from exc


class MemorySink:
    """Keeps the most recently copied text."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text
