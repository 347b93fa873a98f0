from pathlib import Path
from typing import Callable, Final, Mapping

from block_splitter.errors import ExtractionError

from . import clipboard, export_blocks, io_docx, io_text

_READERS: Final[Mapping[str, Callable[[str], str]]] = {
    ".docx": io_docx.read,
    ".txt": io_text.read,
    ".text": io_text.read,
    ".md": io_text.read,
}


def read_document(path: str) -> str:
    """Return the raw text of ``path`` using the reader for its suffix."""
    suffix = Path(path).suffix.lower()
    reader = _READERS.get(suffix)
    if reader is None:
        raise ExtractionError(f"unsupported file type: {suffix or Path(path).name}")
    return reader(path)


__all__ = ["clipboard", "export_blocks", "io_docx", "io_text", "read_document"]
