"""Plain-text IO adapter; line endings are preserved for the normalizer."""

from __future__ import annotations

from pathlib import Path

from block_splitter.errors import ExtractionError


def read(path: str, encoding: str = "utf-8") -> str:
    p = Path(path)
    try:
        with p.open("r", encoding=encoding, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"cannot read {p.name}: {exc}") from exc
