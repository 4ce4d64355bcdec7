#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/ast/nodes.py
"""AST node classes for document representation.

This module defines an mdast-shaped node hierarchy. Every node carries a
string ``type`` (the key the serializer and the markdown bridge dispatch on),
an open ``data`` mapping for auxiliary information such as render hints, and
optional source ``position`` metadata attached by the host that built it.

Node Hierarchy
--------------
- Node
    - Literal: Text, InlineCode
    - Break
    - Parent
        - Root
        - Paragraph, Heading (block-level)
        - Emphasis, Strong, Link, LinkReference (phrasing)
        - AttentionNode (phrasing, configurable ``type``)

Attention nodes are a formal member of the phrasing-content union even
though their ``type`` string is chosen at configuration time. Code that
needs to recognise phrasing content should use :func:`is_phrasing` rather
than comparing type strings.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mdattention.constants import RENDER_HINT_KEY, ReferenceType


@dataclass(frozen=True)
class Point:
    """A place in a source document.

    Parameters
    ----------
    line : int
        1-indexed line number
    column : int
        1-indexed column number
    offset : int or None, default = None
        0-indexed character offset, when the host knows it

    """

    line: int
    column: int
    offset: Optional[int] = None


@dataclass(frozen=True)
class Position:
    """Source span of a node.

    Parameters
    ----------
    start : Point
        Place of the first character
    end : Point or None, default = None
        Place just after the last character, when known

    """

    start: Point
    end: Optional[Point] = None


@dataclass
class Node:
    """Base class for all AST nodes.

    Parameters
    ----------
    type : str
        Node type identifier
    data : dict, default = empty dict
        Auxiliary data for downstream tools (never read for AST semantics)
    position : Position or None, default = None
        Source position attached by the host

    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)
    position: Optional[Position] = None


@dataclass
class Literal(Node):
    """Node holding a string value instead of children."""

    value: str = ""


@dataclass
class Parent(Node):
    """Node holding an ordered list of children."""

    children: list[Node] = field(default_factory=list)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Root(Parent):
    """Document root."""

    type: str = "root"


@dataclass
class Paragraph(Parent):
    """Paragraph of phrasing content."""

    type: str = "paragraph"


@dataclass
class Heading(Parent):
    """ATX heading.

    Parameters
    ----------
    depth : int, default = 1
        Heading rank, 1 to 6

    """

    type: str = "heading"
    depth: int = 1


# ============================================================================
# Phrasing Nodes
# ============================================================================


@dataclass
class Text(Literal):
    """Plain text."""

    type: str = "text"


@dataclass
class InlineCode(Literal):
    """Code span."""

    type: str = "inlineCode"


@dataclass
class Break(Node):
    """Hard line break."""

    type: str = "break"


@dataclass
class Emphasis(Parent):
    """Emphasised content."""

    type: str = "emphasis"


@dataclass
class Strong(Parent):
    """Strongly emphasised content."""

    type: str = "strong"


@dataclass
class Link(Parent):
    """Hyperlink.

    Parameters
    ----------
    url : str, default = ""
        Link destination
    title : str or None, default = None
        Advisory title

    """

    type: str = "link"
    url: str = ""
    title: Optional[str] = None


@dataclass
class LinkReference(Parent):
    """Reference-style link whose destination is defined elsewhere.

    Parameters
    ----------
    identifier : str, default = ""
        Normalised reference identifier
    label : str or None, default = None
        Reference label as written in the source
    reference_type : {"shortcut", "collapsed", "full"}, default = "full"
        How the reference is spelled in markdown

    """

    type: str = "linkReference"
    identifier: str = ""
    label: Optional[str] = None
    reference_type: ReferenceType = "full"


@dataclass
class AttentionNode(Parent):
    """Span delimited on both sides by the same repeated character.

    ``type`` is the configured node name (for example ``"sub"``) and
    ``data["hName"]`` carries the HTML tag name used by downstream renderers.

    Examples
    --------
        >>> node = AttentionNode(type="sub", children=[Text(value="2")], data={"hName": "sub"})
        >>> node.render_hint
        'sub'

    """

    type: str = "attention"

    @property
    def render_hint(self) -> Optional[str]:
        """HTML tag name stored for renderers, if any."""
        return self.data.get(RENDER_HINT_KEY)


PhrasingContent = Union[Text, InlineCode, Break, Emphasis, Strong, Link, LinkReference, AttentionNode]

PHRASING_TYPES = frozenset({"text", "inlineCode", "break", "emphasis", "strong", "link", "linkReference"})


def is_phrasing(node: Node) -> bool:
    """Return True if ``node`` is phrasing (inline) content."""
    return isinstance(node, AttentionNode) or node.type in PHRASING_TYPES
