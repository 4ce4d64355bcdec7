#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/attention/from_markdown.py
"""Token-to-AST extension for single character attention spans."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from mdattention.ast.nodes import AttentionNode
from mdattention.constants import RENDER_HINT_KEY
from mdattention.options.attention import AttentionOptions
from mdattention.parsers.markdown import CompileContext, FromMarkdownExtension, Token

logger = logging.getLogger(__name__)


def attention_from_markdown(options: AttentionOptions | Mapping[str, Any]) -> FromMarkdownExtension:
    """Create the markdown bridge extension for one attention syntax.

    Parameters
    ----------
    options : AttentionOptions or mapping
        Node name, tag name and delimiter of the syntax

    Returns
    -------
    FromMarkdownExtension
        Extension opening an :class:`AttentionNode` when the tokenizer enters
        a ``source_node_name`` span and closing it on exit. Attention spans may
        wrap across soft line breaks.

    Raises
    ------
    InvalidConfigurationError
        If ``options`` is incomplete or invalid

    """
    options = AttentionOptions.coerce(options)
    node_name = options.source_node_name
    tag_name = options.target_tag_name

    def enter_attention(context: CompileContext, token: Token) -> None:
        context.enter(AttentionNode(type=node_name, children=[], data={RENDER_HINT_KEY: tag_name}), token)

    def exit_attention(context: CompileContext, token: Token) -> None:
        context.exit(token)

    logger.debug("Created markdown bridge extension for `%s`", node_name)
    return FromMarkdownExtension(
        can_contain_eols=(node_name,),
        enter={node_name: enter_attention},
        exit={node_name: exit_attention},
    )
