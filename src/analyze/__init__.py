"""Theme-level analysis for pagecheck."""

from analyze.theme import analyze_source, analyze_theme

__all__ = ["analyze_source", "analyze_theme"]
