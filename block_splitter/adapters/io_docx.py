"""DOCX IO adapter returning the raw document text."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable, Iterator

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from lxml import etree

from block_splitter.errors import ExtractionError

logger = logging.getLogger(__name__)

_OPEN_ERRORS = (
    PackageNotFoundError,
    zipfile.BadZipFile,
    etree.LxmlError,
    KeyError,
    ValueError,
    OSError,
)

# every paragraph is followed by a blank line, as mammoth's raw-text extraction does
PARAGRAPH_END = "\n\n"


def _table_lines(tables: Iterable[Table]) -> Iterator[str]:
    """Yield paragraph text from every cell, row by row."""
    return (
        p.text
        for table in tables
        for row in table.rows
        for cell in row.cells
        for p in cell.paragraphs
    )


def read_docx(path: str) -> str:
    """Extract body paragraphs, then table contents, each ended by a blank line."""

    abs_path = Path(path).resolve()
    try:
        doc = Document(str(abs_path))
    except _OPEN_ERRORS as exc:
        raise ExtractionError(f"cannot open {abs_path.name}: {exc}") from exc

    body = [p.text for p in doc.paragraphs]
    tables = list(_table_lines(doc.tables))
    logger.debug("io_docx: %d paragraphs, %d table lines from %s", len(body), len(tables), abs_path)
    return "".join(f"{text}{PARAGRAPH_END}" for text in body + tables)


def read(path: str) -> str:
    """Compatibility wrapper exposing a standard ``read`` entrypoint."""

    return read_docx(path)
