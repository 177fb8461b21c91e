from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.report import build_records
from rules import ALL_CHECKS, run_checks
from rules.config import load_config
from scan.files import find_liquid_files
from utils import relative_posix

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from contract.models import DiagnosticRecord
    from rules.config import PageCheckConfig
    from rules.engine import Check

logger = logging.getLogger(__name__)


def analyze_source(
    source: str,
    *,
    path: str = "<string>",
    config: PageCheckConfig,
    checks: Sequence[Check] = ALL_CHECKS,
) -> list[DiagnosticRecord]:
    """Run checks over one template's text and return positioned records."""
    diagnostics = run_checks(source, checks, config, file=path)
    return build_records(source, diagnostics, path=path)


def analyze_theme(
    *,
    root: Path,
    config: PageCheckConfig | None = None,
    checks: Sequence[Check] = ALL_CHECKS,
) -> list[DiagnosticRecord]:
    """Run checks over every Liquid template under a theme root.

    Args:
        root: Root directory of the theme to analyze
        config: Optional configuration; loaded from pagecheck.toml when omitted
        checks: Checks to run (default: every registered check)

    Returns:
        Diagnostic records ordered by file path, then emission order.
    """
    if config is None:
        config = load_config(root)

    records: list[DiagnosticRecord] = []
    for path in find_liquid_files(
        root,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        rel_path = relative_posix(path, root)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable template %s: %s", rel_path, exc)
            continue
        records.extend(
            analyze_source(source, path=rel_path, config=config, checks=checks)
        )

    logger.debug("Analyzed %s: %d diagnostic(s)", root, len(records))
    return records
