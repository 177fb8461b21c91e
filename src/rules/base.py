"""Check metadata and the diagnostics checks emit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from parse.nodes import SourceSpan


class Severity(str, Enum):
    """How seriously a diagnostic should be taken."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class CheckMeta:
    code: str
    name: str
    description: str
    url: str
    severity: Severity
    recommended: bool = True


@dataclass(frozen=True)
class Diagnostic:
    check: str
    message: str
    span: SourceSpan
    severity: Severity
    file: str = "<string>"

    @property
    def start_index(self) -> int:
        return self.span.start

    @property
    def end_index(self) -> int:
        return self.span.end

    def to_dict(self) -> dict[str, object]:
        return {
            "check": self.check,
            "message": self.message,
            "severity": self.severity.value,
            "file": self.file,
            "start_index": self.start_index,
            "end_index": self.end_index,
        }


__all__ = ["CheckMeta", "Diagnostic", "Severity"]
