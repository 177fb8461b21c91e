from __future__ import annotations

from parse.liquid import parse_document, parse_expression
from parse.nodes import (
    LiquidRawTag,
    LiquidTag,
    NumberNode,
    PaginateMarkup,
    RangeNode,
    SourceSpan,
    StringNode,
    TextNode,
    VariableLookup,
)


def test_parse_document_splits_text_tags_and_raw_tags_in_order() -> None:
    source = (
        "<h1>{{ title }}</h1>"
        "{% paginate collection.products by 12 %}"
        "{% schema %}{}{% endschema %}"
        "tail"
    )

    document = parse_document(source)

    assert [type(node) for node in document.nodes] == [
        TextNode,
        LiquidTag,
        LiquidRawTag,
        TextNode,
    ]
    assert document.nodes[0].value == "<h1>{{ title }}</h1>"
    assert document.nodes[-1].span == SourceSpan(len(source) - 4, len(source))


def test_paginate_markup_is_structured_with_absolute_spans() -> None:
    source = "abc{% paginate collection.products by 12 %}"

    (_, tag) = parse_document(source).nodes

    assert isinstance(tag, LiquidTag)
    assert tag.span == SourceSpan(3, len(source))
    assert isinstance(tag.markup, PaginateMarkup)
    page_size = tag.markup.page_size
    assert isinstance(page_size, NumberNode)
    assert page_size.value == 12
    assert source[page_size.span.start : page_size.span.end] == "12"
    collection = tag.markup.collection
    assert isinstance(collection, VariableLookup)
    assert collection.name == "collection"
    assert [lookup.value for lookup in collection.lookups] == ["products"]


def test_whitespace_control_dashes_are_not_part_of_markup() -> None:
    source = "{%- paginate blog.articles by section.settings.per_page -%}"

    (tag,) = parse_document(source).nodes

    assert isinstance(tag, LiquidTag)
    assert tag.span == SourceSpan(0, len(source))
    assert isinstance(tag.markup, PaginateMarkup)
    page_size = tag.markup.page_size
    assert isinstance(page_size, VariableLookup)
    assert source[page_size.span.start : page_size.span.end] == (
        "section.settings.per_page"
    )
    last = page_size.lookups[-1]
    assert isinstance(last, StringNode)
    assert last.value == "per_page"
    assert source[last.span.start : last.span.end] == "per_page"


def test_other_tags_keep_raw_string_markup() -> None:
    (tag,) = parse_document("{% render 'card', product: product %}").nodes

    assert isinstance(tag, LiquidTag)
    assert tag.name == "render"
    assert tag.markup == "'card', product: product"


def test_paginate_without_by_keeps_raw_string_markup() -> None:
    (tag,) = parse_document("{% paginate collection.products %}").nodes

    assert isinstance(tag, LiquidTag)
    assert tag.markup == "collection.products"


def test_paginate_with_unrecognised_page_size_keeps_structure() -> None:
    (tag,) = parse_document("{% paginate collection.products by 5 | plus: 1 %}").nodes

    assert isinstance(tag, LiquidTag)
    assert isinstance(tag.markup, PaginateMarkup)
    assert tag.markup.page_size is None


def test_raw_tag_body_and_span() -> None:
    source = 'x{% schema %}{"a": 1}{%- endschema -%}y'

    nodes = parse_document(source).nodes

    raw = nodes[1]
    assert isinstance(raw, LiquidRawTag)
    assert raw.name == "schema"
    assert raw.body.value == '{"a": 1}'
    assert source[raw.body.span.start : raw.body.span.end] == '{"a": 1}'
    assert raw.span == SourceSpan(1, len(source) - 1)


def test_unterminated_raw_tag_becomes_plain_tag() -> None:
    (tag, text) = parse_document("{% schema %}{}").nodes

    assert isinstance(tag, LiquidTag)
    assert tag.name == "schema"
    assert isinstance(text, TextNode)
    assert text.value == "{}"


def test_unclosed_tag_is_text() -> None:
    (node,) = parse_document("before {% paginate x by 5").nodes

    assert isinstance(node, TextNode)
    assert node.value == "before {% paginate x by 5"


def test_parse_expression_variants() -> None:
    assert parse_expression("-3") == NumberNode(-3, SourceSpan(0, 2))
    assert parse_expression("2.5") == NumberNode(2.5, SourceSpan(0, 3))
    assert parse_expression('"x"') == StringNode("x", SourceSpan(0, 3))

    range_node = parse_expression("(1..n)")
    assert isinstance(range_node, RangeNode)
    assert range_node.start == NumberNode(1, SourceSpan(1, 2))
    assert isinstance(range_node.end, VariableLookup)

    lookup = parse_expression("settings[key.id]['x']")
    assert isinstance(lookup, VariableLookup)
    assert lookup.name == "settings"
    nested, quoted = lookup.lookups
    assert isinstance(nested, VariableLookup)
    assert nested.name == "key"
    assert quoted == StringNode("x", SourceSpan(17, 20))

    bracket_only = parse_expression("['products']")
    assert isinstance(bracket_only, VariableLookup)
    assert bracket_only.name is None


def test_parse_expression_rejects_trailing_input() -> None:
    assert parse_expression("a b") is None
    assert parse_expression("settings.") is None
    assert parse_expression("") is None
