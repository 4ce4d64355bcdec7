#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/attention/to_markdown.py
"""AST-to-markdown extension for single character attention spans.

The extension contributes a handler that wraps the node's children in the
delimiter, and an unsafe pattern so that a literal delimiter in ordinary text
is escaped instead of being read back as the start of a span.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from mdattention.ast.nodes import AttentionNode, Parent
from mdattention.options.attention import AttentionOptions
from mdattention.renderers.markdown import FULL_PHRASING_SPANS, SerializerState, ToMarkdownExtension
from mdattention.renderers.tracking import SafeInfo, Tracker
from mdattention.renderers.unsafe import UnsafePattern

logger = logging.getLogger(__name__)

# Constructs that occur in phrasing but cannot contain attention, so the
# delimiter needs no escaping inside them. Taken from the serializer so both
# lists stay identical.
CONSTRUCTS_WITHOUT_ATTENTION: tuple[str, ...] = FULL_PHRASING_SPANS


class AttentionHandler:
    """Serializer handler for one configured attention node type.

    Parameters
    ----------
    options : AttentionOptions
        The attention syntax being serialized

    """

    def __init__(self, options: AttentionOptions):
        self.options = options

    def __call__(
        self, node: AttentionNode, parent: Optional[Parent], state: SerializerState, info: SafeInfo
    ) -> str:
        """Serialize ``node`` as ``<char>children<char>``."""
        char = self.options.delimiter_char
        tracker = Tracker.from_info(info)
        exit_construct = state.enter(self.options.source_node_name)
        try:
            value = char
            tracker = tracker.move(char)
            value += state.container_phrasing(
                node, tracker.info(before=char, after=char, encode=info.encode)
            )
            value += char
        finally:
            exit_construct()
        return value

    def peek(self, node: Any, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
        """Return the delimiter, the first character of every serialization."""
        return self.options.delimiter_char

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options.source_node_name!r}, {self.options.delimiter_char!r})"


def attention_to_markdown(options: AttentionOptions | Mapping[str, Any]) -> ToMarkdownExtension:
    """Create the serializer extension for one attention syntax.

    Parameters
    ----------
    options : AttentionOptions or mapping
        Node name, tag name and delimiter of the syntax

    Returns
    -------
    ToMarkdownExtension
        Extension with an :class:`AttentionHandler` for ``source_node_name``
        and an unsafe pattern escaping the delimiter in phrasing, except inside
        :data:`CONSTRUCTS_WITHOUT_ATTENTION`

    Raises
    ------
    InvalidConfigurationError
        If ``options`` is incomplete or invalid

    Examples
    --------
        >>> extension = attention_to_markdown({"mdastNodeName": "sub", "hastNodeName": "sub", "char": "~"})
        >>> extension.unsafe[0].character
        '~'

    """
    options = AttentionOptions.coerce(options)
    logger.debug("Created serializer extension for `%s`", options.source_node_name)
    return ToMarkdownExtension(
        unsafe=(
            UnsafePattern(
                character=options.delimiter_char,
                in_construct=("phrasing",),
                not_in_construct=CONSTRUCTS_WITHOUT_ATTENTION,
            ),
        ),
        handlers={options.source_node_name: AttentionHandler(options)},
    )
