from pathlib import Path

import pytest

from block_splitter.config import DEFAULT_PIPELINE, PipelineSpec, load_spec
from block_splitter.errors import InvalidConfiguration
from block_splitter.options import DEFAULT_MARKER, DEFAULT_MAX_CHUNK_LENGTH, SplitOptions


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "pipeline.yaml"
    path.write_text(body, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    spec = load_spec(tmp_path / "absent.yaml")
    assert spec.pipeline == list(DEFAULT_PIPELINE)
    assert spec.options == {}
    assert PipelineSpec().pipeline == list(DEFAULT_PIPELINE)


def test_yaml_options_are_loaded(tmp_path: Path) -> None:
    path = _write(tmp_path, "options:\n  segment:\n    max_chunk_length: 12\n")
    spec = load_spec(path)
    assert spec.options == {"segment": {"max_chunk_length": 12}}
    assert SplitOptions.from_pass_options(spec.options).max_chunk_length == 12


def test_env_overrides_are_coerced(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEGMENT__MAX_CHUNK_LENGTH", "7")
    monkeypatch.setenv("CLASSIFY__MARKER", "##")
    spec = load_spec(tmp_path / "absent.yaml")
    assert spec.options["segment"] == {"max_chunk_length": 7}
    assert spec.options["classify"] == {"marker": "##"}


@pytest.mark.parametrize("raw", ["[x]", "[&$]", "123", "yes", "##", "null"])
def test_env_marker_is_kept_verbatim(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("CLASSIFY__MARKER", raw)
    spec = load_spec(tmp_path / "absent.yaml")
    assert spec.options["classify"] == {"marker": raw}
    assert SplitOptions.from_pass_options(spec.options).marker == raw


def test_cli_overrides_win(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path, "options:\n  segment:\n    max_chunk_length: 12\n")
    monkeypatch.setenv("SEGMENT__MAX_CHUNK_LENGTH", "9")
    spec = load_spec(path, overrides={"segment": {"max_chunk_length": 3}})
    assert spec.options["segment"]["max_chunk_length"] == 3


def test_unknown_option_section_warns(tmp_path: Path) -> None:
    path = _write(tmp_path, "options:\n  bogus:\n    x: 1\n")
    with pytest.warns(UserWarning, match="bogus"):
        load_spec(path)


@pytest.mark.parametrize("body", ["- just\n- a list\n", "options: [\n"])
def test_malformed_yaml_is_a_configuration_error(tmp_path: Path, body: str) -> None:
    with pytest.raises(InvalidConfiguration):
        load_spec(_write(tmp_path, body))


def test_split_options_defaults() -> None:
    opts = SplitOptions()
    assert (opts.max_chunk_length, opts.marker) == (DEFAULT_MAX_CHUNK_LENGTH, DEFAULT_MARKER)
    assert (DEFAULT_MAX_CHUNK_LENGTH, DEFAULT_MARKER) == (4950, "[&$]")
    assert SplitOptions.from_pass_options(opts.as_pass_options()) == opts


@pytest.mark.parametrize(
    "mapping",
    [
        {"max_chunk_length": 0},
        {"max_chunk_length": True},
        {"max_chunk_length": 2.5},
        {"marker": ""},
        {"marker": 3},
    ],
)
def test_split_options_validation(mapping) -> None:
    with pytest.raises(InvalidConfiguration):
        SplitOptions.from_mapping(mapping)


def test_invalid_configuration_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        SplitOptions(max_chunk_length=-1)
