"""Minimal Liquid tag scanner.

This is not a full Liquid parser. It splits a template into tags, raw
tags and text, and only gives structure to the markup the rules need
(``paginate``). Every other tag keeps its markup as an opaque string.
"""

from __future__ import annotations

import re

from parse.nodes import (
    Document,
    Expression,
    LiquidRawTag,
    LiquidTag,
    Node,
    NumberNode,
    PaginateMarkup,
    RangeNode,
    RawBody,
    SourceSpan,
    StringNode,
    TextNode,
    VariableLookup,
)

RAW_TAGS = frozenset(
    {"raw", "comment", "schema", "javascript", "stylesheet", "style"}
)

_TAG_START = re.compile(r"\{%-?")
_TAG_NAME = re.compile(r"\s*(?P<name>[A-Za-z_][\w-]*)")
_WHITESPACE = re.compile(r"\s*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?![\w])")
_STRING = re.compile(r"'[^']*'|\"[^\"]*\"")
_IDENTIFIER = re.compile(r"[A-Za-z_][\w-]*\??")
_BY_KEYWORD = re.compile(r"\s+by\s+")
_ATTRIBUTES = re.compile(r"\s*(?:,\s*)?[A-Za-z_][\w-]*\s*:")


def _end_tag_pattern(name: str) -> re.Pattern[str]:
    return re.compile(r"\{%-?\s*end" + re.escape(name) + r"\s*-?%\}")


class _ExpressionParser:
    """Recursive-descent parser over a slice of the document source.

    Offsets are absolute positions in the document so that every node
    span can be reported verbatim.
    """

    def __init__(self, source: str, start: int, end: int) -> None:
        self.source = source
        self.pos = start
        self.end = end

    def skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self.source, self.pos, self.end)
        if match is not None:
            self.pos = match.end()

    def at_end(self) -> bool:
        self.skip_whitespace()
        return self.pos >= self.end

    def peek(self, text: str) -> bool:
        return self.source.startswith(text, self.pos) and (
            self.pos + len(text) <= self.end
        )

    def parse_expression(self) -> Expression | None:
        self.skip_whitespace()
        start = self.pos

        match = _NUMBER.match(self.source, self.pos, self.end)
        if match is not None:
            self.pos = match.end()
            text = match.group(0)
            value: int | float = float(text) if "." in text else int(text)
            return NumberNode(value=value, span=SourceSpan(start, self.pos))

        match = _STRING.match(self.source, self.pos, self.end)
        if match is not None:
            self.pos = match.end()
            return StringNode(
                value=match.group(0)[1:-1], span=SourceSpan(start, self.pos)
            )

        if self.peek("("):
            return self._parse_range(start)

        return self._parse_variable_lookup(start)

    def _parse_range(self, start: int) -> RangeNode | None:
        self.pos += 1
        range_start = self.parse_expression()
        if range_start is None:
            return None
        self.skip_whitespace()
        if not self.peek(".."):
            return None
        self.pos += 2
        range_end = self.parse_expression()
        if range_end is None:
            return None
        self.skip_whitespace()
        if not self.peek(")"):
            return None
        self.pos += 1
        return RangeNode(
            start=range_start, end=range_end, span=SourceSpan(start, self.pos)
        )

    def _parse_variable_lookup(self, start: int) -> VariableLookup | None:
        name: str | None = None
        match = _IDENTIFIER.match(self.source, self.pos, self.end)
        if match is not None:
            name = match.group(0)
            self.pos = match.end()
        elif not self.peek("["):
            return None

        lookups: list[Expression] = []
        while True:
            if self.peek(".."):
                break
            if self.peek("."):
                segment = _IDENTIFIER.match(self.source, self.pos + 1, self.end)
                if segment is None:
                    return None
                lookups.append(
                    StringNode(
                        value=segment.group(0),
                        span=SourceSpan(segment.start(), segment.end()),
                    )
                )
                self.pos = segment.end()
            elif self.peek("["):
                self.pos += 1
                inner = self.parse_expression()
                self.skip_whitespace()
                if inner is None or not self.peek("]"):
                    return None
                self.pos += 1
                lookups.append(inner)
            else:
                break

        if name is None and not lookups:
            return None
        return VariableLookup(
            name=name, lookups=tuple(lookups), span=SourceSpan(start, self.pos)
        )


def parse_expression(
    source: str, start: int = 0, end: int | None = None
) -> Expression | None:
    """Parse a single expression spanning exactly ``source[start:end]``."""
    parser = _ExpressionParser(source, start, len(source) if end is None else end)
    expression = parser.parse_expression()
    if expression is None or not parser.at_end():
        return None
    return expression


def parse_paginate_markup(source: str, start: int, end: int) -> PaginateMarkup | None:
    """Parse ``<collection> by <page_size>[, attr: value ...]``.

    Returns ``None`` when the markup does not have that shape. A page size
    that is present but not a recognised expression is kept as ``None``
    inside the markup.
    """
    parser = _ExpressionParser(source, start, end)
    parser.skip_whitespace()
    markup_start = parser.pos
    collection = parser.parse_expression()
    if collection is None:
        return None

    by_match = _BY_KEYWORD.match(source, parser.pos, end)
    if by_match is None:
        return None
    parser.pos = by_match.end()

    page_size = parser.parse_expression()
    if page_size is not None and not parser.at_end():
        if _ATTRIBUTES.match(source, parser.pos, end) is None:
            page_size = None

    markup_end = end
    while markup_end > markup_start and source[markup_end - 1].isspace():
        markup_end -= 1
    return PaginateMarkup(
        collection=collection,
        page_size=page_size,
        span=SourceSpan(markup_start, markup_end),
    )


def _markup_end(source: str, inner_start: int, close: int) -> int:
    if close - 1 >= inner_start and source[close - 1] == "-":
        return close - 1
    return close


def parse_document(source: str) -> Document:
    """Split ``source`` into text, tag and raw-tag nodes in document order."""
    nodes: list[Node] = []
    pos = 0
    text_start = 0

    def flush_text(upto: int) -> None:
        if upto > text_start:
            nodes.append(
                TextNode(
                    value=source[text_start:upto],
                    span=SourceSpan(text_start, upto),
                )
            )

    while True:
        open_match = _TAG_START.search(source, pos)
        if open_match is None:
            break
        close = source.find("%}", open_match.end())
        if close == -1:
            break

        inner_start = open_match.end()
        inner_end = _markup_end(source, inner_start, close)
        name_match = _TAG_NAME.match(source, inner_start, inner_end)
        if name_match is None:
            pos = close + 2
            continue

        tag_start = open_match.start()
        tag_end = close + 2
        name = name_match.group("name")
        markup_start = name_match.end()

        if name in RAW_TAGS:
            end_match = _end_tag_pattern(name).search(source, tag_end)
            if end_match is not None:
                flush_text(tag_start)
                nodes.append(
                    LiquidRawTag(
                        name=name,
                        body=RawBody(
                            value=source[tag_end : end_match.start()],
                            span=SourceSpan(tag_end, end_match.start()),
                        ),
                        span=SourceSpan(tag_start, end_match.end()),
                    )
                )
                pos = text_start = end_match.end()
                continue

        markup: PaginateMarkup | str | None = None
        if name == "paginate":
            markup = parse_paginate_markup(source, markup_start, inner_end)
        if markup is None:
            markup = source[markup_start:inner_end].strip()

        flush_text(tag_start)
        nodes.append(
            LiquidTag(name=name, markup=markup, span=SourceSpan(tag_start, tag_end))
        )
        pos = text_start = tag_end

    flush_text(len(source))
    return Document(source=source, nodes=tuple(nodes))


__all__ = ["RAW_TAGS", "parse_document", "parse_expression", "parse_paginate_markup"]
