"""Building, writing and rendering diagnostic records."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from contract.models import DiagnosticRecord
from utils import line_starts, offset_to_position

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from rules.base import Diagnostic


def build_records(
    source: str, diagnostics: Sequence[Diagnostic], *, path: str
) -> list[DiagnosticRecord]:
    """Attach line/column positions to diagnostics raised against ``source``."""
    starts = line_starts(source)
    records: list[DiagnosticRecord] = []
    for diagnostic in diagnostics:
        start_line, start_col = offset_to_position(
            source, diagnostic.start_index, starts
        )
        end_line, end_col = offset_to_position(source, diagnostic.end_index, starts)
        records.append(
            DiagnosticRecord(
                check=diagnostic.check,
                severity=diagnostic.severity.value,
                path=path,
                message=diagnostic.message,
                start_index=diagnostic.start_index,
                end_index=diagnostic.end_index,
                start_line=start_line,
                start_col=start_col,
                end_line=end_line,
                end_col=end_col,
            )
        )
    return records


def write_jsonl(path: Path, records: Sequence[DiagnosticRecord]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(orjson.dumps(rec.model_dump(), option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def format_text(record: DiagnosticRecord) -> str:
    return f"{record.location()}: {record.severity} [{record.check}] {record.message}"


__all__ = ["build_records", "format_text", "write_jsonl"]
