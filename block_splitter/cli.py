from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import typer

from block_splitter.adapters import read_document
from block_splitter.adapters.clipboard import StreamSink
from block_splitter.adapters.export_blocks import DEFAULT_PREFIX, write_blocks
from block_splitter.block_validation import validate_blocks
from block_splitter.blocks import SegmentationResult
from block_splitter.classifier import BlockCategory
from block_splitter.config import PipelineSpec, load_spec
from block_splitter.core import assemble_report, run_inspect, run_split, write_run_report
from block_splitter.errors import BlockSplitterError, InvalidConfiguration
from block_splitter.options import SplitOptions
from block_splitter.render import render_blocks

_CATEGORY_COLORS: Mapping[BlockCategory, str] = {
    BlockCategory.NORMAL: typer.colors.CYAN,
    BlockCategory.MARKER_FIRST: typer.colors.MAGENTA,
    BlockCategory.AFTER_MARKER: typer.colors.YELLOW,
}


def _spec_path_candidates(path: str | Path) -> Iterator[Path]:
    """Candidate spec paths: as given, beside the package, inside it."""
    candidate = Path(path)
    pkg_dir = Path(__file__).resolve().parent
    yield from (
        candidate,
        pkg_dir.parent / candidate,
        pkg_dir / candidate,
    )


def _resolve_spec_path(path: str | Path) -> Path:
    """First candidate that exists, else ``path`` unchanged."""
    return next((p for p in _spec_path_candidates(path) if p.exists()), Path(path))


def _format_timings(timings: Mapping[str, float]) -> str:
    """Return ``timings`` as newline-delimited ``name: seconds`` strings."""
    return "\n".join(f"{n}: {t:.4f}s" for n, t in timings.items())


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any library error."""
    try:
        func()
    except typer.Exit:
        raise
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        _exit_with_error(exc)


def _cli_overrides(max_chars: int | None, marker: str | None) -> dict[str, dict[str, Any]]:
    segment_opts = {"max_chunk_length": max_chars} if max_chars is not None else {}
    classify_opts = {"marker": marker} if marker is not None else {}
    return {
        k: v
        for k, v in {"segment": segment_opts, "classify": classify_opts}.items()
        if v
    }


def _style(label: str, category: BlockCategory) -> str:
    return typer.style(label, fg=_CATEGORY_COLORS[category], bold=True)


def _split(
    input_path: Path, spec: PipelineSpec
) -> tuple[SegmentationResult, dict[str, Any], dict[str, float]]:
    """Read ``input_path`` and run ``spec``; returns result, meta (with raw text), timings."""
    text = read_document(str(input_path))
    artifact, timings = run_split(text, spec, source=str(input_path.resolve()))
    if not isinstance(artifact.payload, SegmentationResult):
        raise InvalidConfiguration("pipeline must end with assemble_blocks")
    return artifact.payload, {**(artifact.meta or {}), "text": text}, timings


def _run_split(
    input_path: Path,
    out_dir: Path | None,
    prefix: str,
    max_chars: int | None,
    marker: str | None,
    spec: str,
    report: Path | None,
    validate: bool,
    verbose: bool,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s"
        )
    s = load_spec(_resolve_spec_path(spec), overrides=_cli_overrides(max_chars, marker))
    result, meta, timings = _split(input_path, s)
    typer.echo(render_blocks(result, _style))
    if out_dir is not None:
        written = write_blocks(result.blocks, out_dir, prefix)
        typer.echo(f"exported {len(written)} files to {out_dir}")
    if report is not None:
        write_run_report(report, assemble_report(timings, meta))
    if verbose:
        typer.echo(_format_timings(timings), err=True)
    if validate:
        opts = SplitOptions.from_pass_options(s.options)
        checked = validate_blocks(result.blocks, meta["text"], opts)
        if checked.has_issues():
            raise BlockSplitterError(f"validation failed: {checked}")


def _run_copy(
    input_path: Path,
    position: int,
    max_chars: int | None,
    marker: str | None,
    spec: str,
) -> None:
    s = load_spec(_resolve_spec_path(spec), overrides=_cli_overrides(max_chars, marker))
    result, _, _ = _split(input_path, s)
    if not 1 <= position <= result.block_count:
        raise IndexError(f"block {position} out of range (1..{result.block_count})")
    StreamSink().write_text(result.blocks[position - 1].content)


def _run_inspect() -> None:
    print(json.dumps(run_inspect(), indent=2))


app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def split(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    out_dir: Path | None = typer.Option(None, "--out-dir", file_okay=False),
    prefix: str = typer.Option(DEFAULT_PREFIX, "--prefix"),
    max_chars: int | None = typer.Option(None, "--max-chars"),
    marker: str | None = typer.Option(None, "--marker"),
    spec: str = typer.Option("pipeline.yaml", "--spec"),
    report: Path | None = typer.Option(None, "--report"),
    validate: bool = typer.Option(False, "--validate"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Split a .docx or text file into blocks."""
    _safe(
        lambda: _run_split(
            input_path,
            out_dir,
            prefix,
            max_chars,
            marker,
            spec,
            report,
            validate,
            verbose,
        )
    )


@app.command()
def copy(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    position: int = typer.Argument(..., help="1-based block number"),
    max_chars: int | None = typer.Option(None, "--max-chars"),
    marker: str | None = typer.Option(None, "--marker"),
    spec: str = typer.Option("pipeline.yaml", "--spec"),
) -> None:
    """Write one block's content to stdout."""
    _safe(lambda: _run_copy(input_path, position, max_chars, marker, spec))


@app.command()
def inspect() -> None:
    """Show the registered passes."""
    _run_inspect()


if __name__ == "__main__":
    app()
