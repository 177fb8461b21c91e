"""Checks for pagecheck."""

from rules.config import (
    ConfigError,
    PageCheckConfig,
    PaginationSizeSettings,
    load_config,
)
from rules.engine import Check, CheckContext, NodeVisitor, run_checks, run_document
from rules.pagination_size import PaginationSize

ALL_CHECKS: tuple[Check, ...] = (PaginationSize(),)

__all__ = [
    "ALL_CHECKS",
    "Check",
    "CheckContext",
    "ConfigError",
    "NodeVisitor",
    "PageCheckConfig",
    "PaginationSize",
    "PaginationSizeSettings",
    "load_config",
    "run_checks",
    "run_document",
]
