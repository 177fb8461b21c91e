"""Traversal engine that drives checks over a scanned document.

Each run creates a fresh visitor per check, dispatches every node to the
matching callback in document order, and only then calls each
``on_code_path_end`` exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from parse.liquid import parse_document
from parse.nodes import Document, LiquidRawTag, LiquidTag, Node, SourceSpan, TextNode
from rules.base import CheckMeta, Diagnostic

if TYPE_CHECKING:
    from rules.config import CheckSettings, PageCheckConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeVisitor:
    """Typed callback registrations for the node kinds checks can observe."""

    liquid_tag: Callable[[LiquidTag], None] | None = None
    liquid_raw_tag: Callable[[LiquidRawTag], None] | None = None
    on_code_path_end: Callable[[], None] | None = None


@dataclass
class CheckContext:
    """Per-run state handed to a check: its settings and the report sink."""

    meta: CheckMeta
    settings: CheckSettings
    file: str = "<string>"
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, message: str, span: SourceSpan) -> None:
        self.diagnostics.append(
            Diagnostic(
                check=self.meta.code,
                message=message,
                span=span,
                severity=self.meta.severity,
                file=self.file,
            )
        )


class Check(Protocol):
    meta: CheckMeta

    def create(self, context: CheckContext) -> NodeVisitor: ...


def _dispatch(node: Node, visitor: NodeVisitor) -> None:
    if isinstance(node, LiquidTag):
        if visitor.liquid_tag is not None:
            visitor.liquid_tag(node)
        return
    if isinstance(node, LiquidRawTag):
        if visitor.liquid_raw_tag is not None:
            visitor.liquid_raw_tag(node)
        return
    if isinstance(node, TextNode):
        return
    raise AssertionError(f"Unhandled node type: {type(node)!r}")


def run_document(
    document: Document,
    checks: Sequence[Check],
    config: PageCheckConfig,
    *,
    file: str = "<string>",
) -> list[Diagnostic]:
    """Run every enabled check over an already scanned document."""
    contexts: list[CheckContext] = []
    visitors: list[NodeVisitor] = []
    for check in checks:
        settings = config.checks.settings_for(check.meta.code)
        if not settings.enabled:
            logger.debug("Skipping disabled check %s", check.meta.code)
            continue
        context = CheckContext(meta=check.meta, settings=settings, file=file)
        contexts.append(context)
        visitors.append(check.create(context))

    for node in document.nodes:
        for visitor in visitors:
            _dispatch(node, visitor)

    for visitor in visitors:
        if visitor.on_code_path_end is not None:
            visitor.on_code_path_end()

    return [diagnostic for context in contexts for diagnostic in context.diagnostics]


def run_checks(
    source: str,
    checks: Sequence[Check],
    config: PageCheckConfig,
    *,
    file: str = "<string>",
) -> list[Diagnostic]:
    """Scan ``source`` and run every enabled check over it."""
    return run_document(parse_document(source), checks, config, file=file)


__all__ = [
    "Check",
    "CheckContext",
    "NodeVisitor",
    "run_checks",
    "run_document",
]
