from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from block_splitter.blocks import SegmentationResult  # noqa: E402
from block_splitter.core import segment_text  # noqa: E402
from block_splitter.options import SplitOptions  # noqa: E402

SMALL = SplitOptions(max_chunk_length=5, marker="[&$]")


@pytest.fixture
def small_options() -> SplitOptions:
    return SMALL


@pytest.fixture
def split_small() -> Callable[[str], SegmentationResult]:
    return lambda text: segment_text(text, SMALL, token="t")


@pytest.fixture
def write_docx(tmp_path: Path) -> Callable[..., Path]:
    docx = pytest.importorskip("docx")

    def _write(
        *paragraphs: str,
        table: tuple[tuple[str, ...], ...] = (),
        name: str = "doc.docx",
    ) -> Path:
        doc = docx.Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        if table:
            t = doc.add_table(rows=len(table), cols=len(table[0]))
            for r, row in enumerate(table):
                for c, value in enumerate(row):
                    t.cell(r, c).text = value
        path = tmp_path / name
        doc.save(str(path))
        return path

    return _write
