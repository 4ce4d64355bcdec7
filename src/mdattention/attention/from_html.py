#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/attention/from_html.py
"""HTML-to-AST extension for single character attention spans."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from mdattention.ast.nodes import AttentionNode
from mdattention.options.attention import AttentionOptions
from mdattention.parsers.html import ElementHandler, HtmlToAstState

logger = logging.getLogger(__name__)


def attention_from_html(options: AttentionOptions | Mapping[str, Any]) -> dict[str, ElementHandler]:
    """Create the HTML converter extension for one attention syntax.

    Parameters
    ----------
    options : AttentionOptions or mapping
        Node name, tag name and delimiter of the syntax

    Returns
    -------
    dict
        ``{target_tag_name: handler}``; the handler converts the element's
        children with ``state.all``, wraps them in an :class:`AttentionNode`
        of type ``source_node_name`` and copies the element position with
        ``state.patch``

    Raises
    ------
    InvalidConfigurationError
        If ``options`` is incomplete or invalid

    """
    options = AttentionOptions.coerce(options)
    node_name = options.source_node_name

    def convert_attention(state: HtmlToAstState, element: Any) -> AttentionNode:
        result = AttentionNode(type=node_name, children=state.all(element))
        state.patch(element, result)
        return result

    logger.debug("Created HTML extension mapping <%s> to `%s`", options.target_tag_name, node_name)
    return {options.target_tag_name: convert_attention}
