#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
strip_positions : Copy a tree without source positions
node_to_dict : Convert a tree to plain dictionaries

Examples
--------
Compare two trees while ignoring where they came from:

    >>> from mdattention.ast import Point, Position, Text
    >>> from mdattention.ast.utils import strip_positions
    >>> located = Text(value="x", position=Position(start=Point(line=1, column=1)))
    >>> strip_positions(located) == Text(value="x")
    True

"""

from __future__ import annotations

import dataclasses
from typing import Any, Union

from mdattention.ast.nodes import Literal, Node, Parent


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join text parts of sibling nodes

    Returns
    -------
    str
        Concatenated literal values

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    if isinstance(node_or_nodes, Literal):
        return node_or_nodes.value
    if isinstance(node_or_nodes, Parent):
        return joiner.join(extract_text(child, joiner) for child in node_or_nodes.children)
    return ""


def strip_positions(node: Node) -> Node:
    """Return a deep copy of ``node`` with every ``position`` cleared.

    The original tree is left untouched.

    """
    changes: dict[str, Any] = {"position": None, "data": dict(node.data)}
    if isinstance(node, Parent):
        changes["children"] = [strip_positions(child) for child in node.children]
    return dataclasses.replace(node, **changes)


def node_to_dict(node: Node, include_position: bool = True) -> dict[str, Any]:
    """Convert a node tree into nested dictionaries.

    Parameters
    ----------
    node : Node
        Root of the tree to convert
    include_position : bool, default = True
        Whether to emit ``position`` entries for nodes that have one

    Returns
    -------
    dict
        mdast-style mapping with ``type``, node fields and ``children``

    """
    result: dict[str, Any] = {"type": node.type}
    for node_field in dataclasses.fields(node):
        name = node_field.name
        if name in ("type", "children", "position"):
            continue
        value = getattr(node, name)
        if name == "data" and not value:
            continue
        result[name] = dict(value) if name == "data" else value

    if include_position and node.position is not None:
        result["position"] = dataclasses.asdict(node.position)

    if isinstance(node, Parent):
        result["children"] = [node_to_dict(child, include_position) for child in node.children]

    return result
