"""Write each block to its own plain-text file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from block_splitter.blocks import Block

DEFAULT_PREFIX = "block_"


def block_filename(position: int, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the file name for the block at 1-based ``position``."""
    return f"{prefix}{position}.txt"


def _write(path: Path, content: str) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


def write_blocks(
    blocks: Iterable[Block], out_dir: str | Path, prefix: str = DEFAULT_PREFIX
) -> list[Path]:
    """Write every block's content verbatim; return the written paths in order."""
    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)
    return [
        _write(target / block_filename(i, prefix), b.content)
        for i, b in enumerate(blocks, 1)
    ]
