"""Output contract for pagecheck diagnostics."""

from contract.models import DIAGNOSTICS_JSONL, DiagnosticRecord
from contract.report import build_records, format_text, write_jsonl

__all__ = [
    "DIAGNOSTICS_JSONL",
    "DiagnosticRecord",
    "build_records",
    "format_text",
    "write_jsonl",
]
