"""PaginationSize: keep ``{% paginate %}`` page sizes within performant bounds.

Literal page sizes are checked as soon as the tag is visited. Page sizes
read from section settings (``section.settings.page_size``) are recorded
and resolved after the whole document has been visited, because the
``{% schema %}`` block that declares the setting usually comes last.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, cast

import orjson

from parse.nodes import (
    LiquidRawTag,
    LiquidTag,
    NumberNode,
    PaginateMarkup,
    SourceSpan,
    StringNode,
    VariableLookup,
)
from rules.base import CheckMeta, Severity
from rules.config import PaginationSizeSettings
from rules.engine import CheckContext, NodeVisitor
from rules.schema import SchemaSetting, parse_schema_settings

logger = logging.getLogger(__name__)

PAGINATE_TAG = "paginate"
SCHEMA_TAG = "schema"

MISSING_DEFAULT_MESSAGE = (
    "Default pagination size should be defined in the section settings."
)


@dataclass(frozen=True)
class Bounds:
    """Inclusive page size bounds."""

    min_size: int
    max_size: int

    def contains(self, value: int | float) -> bool:
        return self.min_size <= value <= self.max_size


@dataclass(frozen=True)
class DeferredSite:
    """A paginate tag whose page size is a settings lookup."""

    setting_id: str
    lookup_span: SourceSpan
    tag_span: SourceSpan


def _coerce_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def format_value(value: Any) -> str:
    """Render a value the way it should read inside a message."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return orjson.dumps(value).decode()
    return str(value)


def deferred_site(
    lookup: VariableLookup, tag_span: SourceSpan
) -> DeferredSite | None:
    """Build a deferred site when the lookup ends in a named segment."""
    if not lookup.lookups:
        return None
    last = lookup.lookups[-1]
    if not isinstance(last, StringNode):
        return None
    return DeferredSite(
        setting_id=last.value, lookup_span=lookup.span, tag_span=tag_span
    )


@dataclass
class _PaginationRun:
    context: CheckContext
    bounds: Bounds
    settings: dict[str, SchemaSetting] = field(default_factory=dict)
    deferred: list[DeferredSite] = field(default_factory=list)

    def range_message(self) -> str:
        return (
            "Pagination size must be a positive integer between "
            f"{self.bounds.min_size} and {self.bounds.max_size}."
        )

    def default_message(self, default: Any) -> str:
        return (
            "This setting's default value should be between "
            f"{self.bounds.min_size} and {self.bounds.max_size} "
            f"but is currently {format_value(default)}."
        )

    def check_page_size(
        self, span: SourceSpan, value: int | float | None, message: str
    ) -> None:
        if value is not None and self.bounds.contains(value):
            return
        self.context.report(message, span)

    def liquid_tag(self, node: LiquidTag) -> None:
        if node.name != PAGINATE_TAG or not isinstance(node.markup, PaginateMarkup):
            return

        page_size = node.markup.page_size
        if isinstance(page_size, VariableLookup):
            site = deferred_site(page_size, node.span)
            if site is not None:
                self.deferred.append(site)
        elif isinstance(page_size, NumberNode):
            self.check_page_size(
                page_size.span, page_size.value, self.range_message()
            )

    def liquid_raw_tag(self, node: LiquidRawTag) -> None:
        if node.name != SCHEMA_TAG:
            return

        parsed = parse_schema_settings(node.body.value)
        if parsed is None:
            return
        # First declaration of an id wins, across and within schema blocks.
        for setting in parsed:
            self.settings.setdefault(setting.id, setting)

    def on_code_path_end(self) -> None:
        for site in self.deferred:
            setting = self.settings.get(site.setting_id)
            if setting is None:
                logger.debug("No schema setting named %r", site.setting_id)
                continue

            if not setting.has_default:
                self.context.report(MISSING_DEFAULT_MESSAGE, site.tag_span)
                continue

            self.check_page_size(
                site.tag_span,
                _coerce_number(setting.default),
                self.default_message(setting.default),
            )


class PaginationSize:
    meta = CheckMeta(
        code="PaginationSize",
        name="Ensure paginate tags are used with performant sizes",
        description="This check is aimed at keeping response times low.",
        url="https://shopify.dev/docs/themes/tools/theme-check/checks/pagination-size",
        severity=Severity.WARNING,
        recommended=True,
    )

    def create(self, context: CheckContext) -> NodeVisitor:
        settings = cast(PaginationSizeSettings, context.settings)
        run = _PaginationRun(
            context=context,
            bounds=Bounds(min_size=settings.min_size, max_size=settings.max_size),
        )
        return NodeVisitor(
            liquid_tag=run.liquid_tag,
            liquid_raw_tag=run.liquid_raw_tag,
            on_code_path_end=run.on_code_path_end,
        )


__all__ = [
    "Bounds",
    "DeferredSite",
    "MISSING_DEFAULT_MESSAGE",
    "PaginationSize",
    "deferred_site",
    "format_value",
]
