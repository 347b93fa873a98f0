import zipfile
from pathlib import Path

from block_splitter.adapters.clipboard import MemorySink
from block_splitter.errors import ClipboardError
from block_splitter.options import SplitOptions
from block_splitter.session import SplitterSession


class _BrokenSink:
    def write_text(self, text: str) -> None:
        raise ClipboardError("denied")


def _session() -> SplitterSession:
    return SplitterSession(options=SplitOptions(max_chunk_length=5), token_factory=lambda: "s")


def test_load_text_replaces_result() -> None:
    session = _session()
    result = session.load_text("aaaaa\nbb")
    assert result.contents() == ["aaaaa", "bb"]
    assert session.result is result
    assert result.blocks[0].id == "block-s-0-5"


def test_copy_sets_active_block() -> None:
    session = _session()
    session.load_text("aaaaa\nbb")
    sink = MemorySink()
    assert session.copy_block(1, sink)
    assert sink.text == "bb"
    assert session.active_block_index == 1


def test_copy_out_of_range_is_ignored() -> None:
    session = _session()
    session.load_text("abc")
    assert not session.copy_block(3, MemorySink())
    assert not session.copy_block(-1, MemorySink())
    assert session.active_block_index is None


def test_copy_failure_is_not_fatal(caplog) -> None:
    session = _session()
    session.load_text("aaaaa\nbb")
    session.copy_block(0, MemorySink())
    assert not session.copy_block(1, _BrokenSink())
    assert session.active_block_index == 0
    assert session.last_error == "denied"
    assert "Copy failed" in caplog.text


def test_failed_document_keeps_previous_blocks(tmp_path: Path) -> None:
    session = _session()
    previous = session.load_text("abc")
    bad = tmp_path / "broken.docx"
    bad.write_text("nope", encoding="utf-8")
    assert not session.load_document(str(bad))
    assert session.result is previous
    assert session.last_error



def test_malformed_docx_xml_keeps_previous_blocks(tmp_path: Path, write_docx) -> None:
    valid = write_docx("fine")
    bad = tmp_path / "malformed.docx"
    with zipfile.ZipFile(valid) as src, zipfile.ZipFile(bad, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "word/document.xml":
                data = b"<w:document><broken"
            dst.writestr(item, data)
    session = _session()
    previous = session.load_text("abc")
    assert not session.load_document(str(bad))
    assert session.result is previous
    assert "malformed.docx" in session.last_error


def test_load_document_from_text_file(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"ab\r\ncd")
    session = _session()
    assert session.load_document(str(path))
    assert session.result.contents() == ["ab\ncd"]
    assert session.result.total_characters == 6


def test_loading_clears_active_block_and_reset_clears_all() -> None:
    session = _session()
    session.load_text("abc")
    session.copy_block(0, MemorySink())
    session.load_text("def")
    assert session.active_block_index is None
    session.reset()
    assert session.result.block_count == 0
    assert session.result.total_characters == 0
