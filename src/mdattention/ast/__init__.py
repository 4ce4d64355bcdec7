#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The node classes mirror the shape of mdast so that the three attention
extensions can move the same tree between markdown tokens, markdown text and
HTML elements.

Examples
--------
    >>> from mdattention.ast import AttentionNode, Paragraph, Root, Text
    >>> doc = Root(children=[
    ...     Paragraph(children=[
    ...         Text(value="H"),
    ...         AttentionNode(type="sub", children=[Text(value="2")], data={"hName": "sub"}),
    ...         Text(value="O"),
    ...     ])
    ... ])

"""

from __future__ import annotations

from mdattention.ast.nodes import (
    PHRASING_TYPES,
    AttentionNode,
    Break,
    Emphasis,
    Heading,
    InlineCode,
    Link,
    LinkReference,
    Literal,
    Node,
    Paragraph,
    Parent,
    PhrasingContent,
    Point,
    Position,
    Root,
    Strong,
    Text,
    is_phrasing,
)
from mdattention.ast.utils import extract_text, node_to_dict, strip_positions

__all__ = [
    "PHRASING_TYPES",
    "AttentionNode",
    "Break",
    "Emphasis",
    "Heading",
    "InlineCode",
    "Link",
    "LinkReference",
    "Literal",
    "Node",
    "Paragraph",
    "Parent",
    "PhrasingContent",
    "Point",
    "Position",
    "Root",
    "Strong",
    "Text",
    "extract_text",
    "is_phrasing",
    "node_to_dict",
    "strip_positions",
]
