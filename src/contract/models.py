"""Diagnostic records emitted at the pagecheck output boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Schema version for diagnostics.jsonl records.
REPORT_SCHEMA_VERSION = 1

DIAGNOSTICS_JSONL = "diagnostics.jsonl"


class DiagnosticRecord(BaseModel):
    """Schema for diagnostics.jsonl records."""

    schema_version: int = Field(default=REPORT_SCHEMA_VERSION)
    check: str
    severity: str
    path: str
    message: str
    start_index: int
    end_index: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def location(self) -> str:
        return f"{self.path}:{self.start_line}:{self.start_col}"


__all__ = ["DIAGNOSTICS_JSONL", "DiagnosticRecord", "REPORT_SCHEMA_VERSION"]
