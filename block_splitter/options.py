"""Resolved configuration for a segmentation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from block_splitter.errors import InvalidConfiguration

DEFAULT_MAX_CHUNK_LENGTH = 4950
DEFAULT_MARKER = "[&$]"


def _positive_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"max_chunk_length must be an integer, got {value!r}")
    if value < 1:
        raise InvalidConfiguration(f"max_chunk_length must be >= 1, got {value}")
    return value


def _marker(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidConfiguration(f"marker must be a non-empty string, got {value!r}")
    return value


@dataclass(frozen=True)
class SplitOptions:
    """Block length limit and trigger marker for one run."""

    max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH
    marker: str = DEFAULT_MARKER

    def __post_init__(self) -> None:
        _positive_int(self.max_chunk_length)
        _marker(self.marker)

    @classmethod
    def from_mapping(cls, opts: Mapping[str, Any] | None) -> SplitOptions:
        """Build options from a flat mapping, ignoring unrelated keys."""

        opts = opts or {}
        return cls(
            opts.get("max_chunk_length", DEFAULT_MAX_CHUNK_LENGTH),
            opts.get("marker", DEFAULT_MARKER),
        )

    @classmethod
    def from_pass_options(cls, options: Mapping[str, Mapping[str, Any]] | None) -> SplitOptions:
        """Pick ``segment.max_chunk_length`` and ``classify.marker`` from per-pass options."""

        options = options or {}
        return cls.from_mapping(
            {
                **dict(options.get("segment") or {}),
                **dict(options.get("classify") or {}),
            }
        )

    def as_pass_options(self) -> dict[str, dict[str, Any]]:
        """Inverse of :meth:`from_pass_options`."""

        return {
            "segment": {"max_chunk_length": self.max_chunk_length},
            "classify": {"marker": self.marker},
        }


__all__ = ["DEFAULT_MARKER", "DEFAULT_MAX_CHUNK_LENGTH", "SplitOptions"]
