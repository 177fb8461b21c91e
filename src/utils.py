"""Shared utilities for pagecheck"""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path


def line_starts(source: str) -> list[int]:
    """Return the offset at which each line of ``source`` begins."""
    starts = [0]
    for index, char in enumerate(source):
        if char == "\n":
            starts.append(index + 1)
    return starts


def offset_to_position(
    source: str, offset: int, starts: list[int] | None = None
) -> tuple[int, int]:
    """Convert a character offset into a 1-based ``(line, column)`` pair.

    Args:
        source: Full document text the offset points into
        offset: Character offset; clamped to ``[0, len(source)]``
        starts: Precomputed ``line_starts(source)`` to reuse across calls

    Examples:
        >>> offset_to_position("ab\\ncd", 0)
        (1, 1)
        >>> offset_to_position("ab\\ncd", 4)
        (2, 2)
    """
    if starts is None:
        starts = line_starts(source)
    offset = max(0, min(offset, len(source)))
    line_index = bisect_right(starts, offset) - 1
    return line_index + 1, offset - starts[line_index] + 1


def relative_posix(path: str | Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes.

    Paths outside ``root`` are returned as given.
    """
    candidate = Path(path)
    try:
        relative = candidate.relative_to(root)
    except ValueError:
        return candidate.as_posix()
    return relative.as_posix()
