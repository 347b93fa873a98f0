"""Line-ending normalization applied before segmentation."""

from __future__ import annotations

LINE_BREAK = "\n"
CRLF = "\r\n"


def normalize_line_endings(text: str) -> str:
    """Rewrite every ``\\r\\n`` pair as ``\\n``.

    Lone ``\\r`` and lone ``\\n`` are left untouched.
    """

    return text.replace(CRLF, LINE_BREAK)


def count_crlf(text: str) -> int:
    """Return how many ``\\r\\n`` pairs :func:`normalize_line_endings` rewrites."""

    return text.count(CRLF)


__all__ = ["CRLF", "LINE_BREAK", "count_crlf", "normalize_line_endings"]
