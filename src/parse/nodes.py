"""Typed node model for scanned Liquid documents."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Half-open character range ``[start, end)`` into the document source."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class NumberNode:
    value: int | float
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class StringNode:
    value: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class VariableLookup:
    """A path into context data such as ``section.settings.page_size``.

    ``name`` is ``None`` for lookups that start with a bracket
    (``['products']``). Dotted segments and quoted bracket segments are
    ``StringNode`` lookups; bare bracket expressions keep their own type.
    """

    name: str | None
    lookups: tuple[Expression, ...]
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class RangeNode:
    start: Expression
    end: Expression
    span: SourceSpan


Expression = NumberNode | StringNode | VariableLookup | RangeNode


@dataclass(frozen=True, slots=True)
class PaginateMarkup:
    collection: Expression
    page_size: Expression | None
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class LiquidTag:
    name: str
    markup: PaginateMarkup | str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class RawBody:
    value: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class LiquidRawTag:
    name: str
    body: RawBody
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class TextNode:
    value: str
    span: SourceSpan


Node = LiquidTag | LiquidRawTag | TextNode


@dataclass(frozen=True, slots=True)
class Document:
    source: str
    nodes: tuple[Node, ...]


__all__ = [
    "Document",
    "Expression",
    "LiquidRawTag",
    "LiquidTag",
    "Node",
    "NumberNode",
    "PaginateMarkup",
    "RangeNode",
    "RawBody",
    "SourceSpan",
    "StringNode",
    "TextNode",
    "VariableLookup",
]
