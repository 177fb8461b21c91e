"""Liquid document scanning for pagecheck."""

from parse.liquid import parse_document
from parse.nodes import Document, Node, SourceSpan

__all__ = ["Document", "Node", "SourceSpan", "parse_document"]
