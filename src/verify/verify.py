"""Determinism verification for pagecheck diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from analyze.theme import analyze_theme
from rules.config import load_config

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import DiagnosticRecord
    from rules.config import PageCheckConfig


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    diagnostic_count: int = 0


def _describe(record: DiagnosticRecord | None) -> str:
    if record is None:
        return "<none>"
    return f"{record.location()} [{record.check}] {record.message}"


def verify_determinism(
    *, root: Path, config: PageCheckConfig | None = None
) -> DeterminismResult:
    """Verify that analyzing a theme twice yields identical diagnostics.

    Both runs share one loaded configuration so that only the analysis
    itself is compared.

    Args:
        root: Theme root to analyze.
        config: Optional configuration; loaded from pagecheck.toml when omitted.

    Returns:
        DeterminismResult with ok status and a description of each position
        at which the two runs disagree.

    Raises:
        NotADirectoryError: If root is not a directory.
    """
    if not root.is_dir():
        msg = f"Theme root is not a directory: {root}"
        raise NotADirectoryError(msg)
    if config is None:
        config = load_config(root)

    first = analyze_theme(root=root, config=config)
    second = analyze_theme(root=root, config=config)

    mismatches: list[str] = []
    for index in range(max(len(first), len(second))):
        left = first[index] if index < len(first) else None
        right = second[index] if index < len(second) else None
        if left != right:
            mismatches.append(f"#{index}: {_describe(left)} != {_describe(right)}")

    return DeterminismResult(
        ok=not mismatches,
        mismatches=tuple(mismatches),
        diagnostic_count=len(first),
    )
