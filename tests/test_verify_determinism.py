from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest

from contract.models import DiagnosticRecord
from verify.verify import DeterminismResult, verify_determinism

if TYPE_CHECKING:
    from pathlib import Path


def _write_minimal_theme(root: Path) -> None:
    (root / "sections").mkdir(parents=True, exist_ok=True)
    (root / "sections" / "main.liquid").write_text(
        "{% paginate collection.products by 99 %}{% endpaginate %}\n",
        encoding="utf-8",
    )


def _record(message: str) -> DiagnosticRecord:
    return DiagnosticRecord(
        check="PaginationSize",
        severity="warning",
        path="sections/main.liquid",
        message=message,
        start_index=0,
        end_index=1,
        start_line=1,
        start_col=1,
        end_line=1,
        end_col=2,
    )


def test_verify_determinism_requires_directory(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing"

    with pytest.raises(NotADirectoryError, match="Theme root is not a directory"):
        verify_determinism(root=missing_dir)


def test_verify_determinism_passes_for_real_analysis(tmp_path: Path) -> None:
    _write_minimal_theme(tmp_path)

    result = verify_determinism(root=tmp_path)

    assert result == DeterminismResult(ok=True, mismatches=(), diagnostic_count=1)


def test_verify_determinism_reports_mismatched_positions(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_minimal_theme(tmp_path)
    runs = itertools.count()

    def _fake_analyze_theme(**_: object) -> list[DiagnosticRecord]:
        if next(runs) == 0:
            return [_record("first"), _record("same")]
        return [_record("second"), _record("same"), _record("extra")]

    monkeypatch.setattr("verify.verify.analyze_theme", _fake_analyze_theme)

    result = verify_determinism(root=tmp_path)

    assert result.ok is False
    assert result.diagnostic_count == 2
    assert len(result.mismatches) == 2
    assert result.mismatches[0].startswith("#0: ")
    assert result.mismatches[1] == (
        "#2: <none> != sections/main.liquid:1:1 [PaginationSize] extra"
    )
