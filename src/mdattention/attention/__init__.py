#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/attention/__init__.py
"""Factories for single character attention syntaxes.

An attention span is inline content delimited on both sides by the same
character, such as ``~sub~`` or ``^sup^``. One :class:`AttentionOptions`
describes a syntax; the factories below turn it into extensions for the three
hosts that move a tree in and out of markdown and HTML:

- :func:`attention_from_markdown` - token stream to AST
- :func:`attention_to_markdown` - AST to markdown text
- :func:`attention_from_html` - HTML elements to AST

The extensions never call each other and keep no state between calls.

Examples
--------
    >>> from mdattention.attention import create_attention_extensions
    >>> sub = create_attention_extensions({"source_node_name": "sub", "target_tag_name": "sub", "delimiter_char": "~"})
    >>> sorted(sub.from_html)
    ['sub']

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from mdattention.attention.from_html import attention_from_html
from mdattention.attention.from_markdown import attention_from_markdown
from mdattention.attention.to_markdown import (
    CONSTRUCTS_WITHOUT_ATTENTION,
    AttentionHandler,
    attention_to_markdown,
)
from mdattention.options.attention import AttentionOptions
from mdattention.parsers.html import ElementHandler
from mdattention.parsers.markdown import FromMarkdownExtension
from mdattention.renderers.markdown import ToMarkdownExtension


@dataclass(frozen=True)
class AttentionExtensions:
    """The three extensions generated for one attention syntax."""

    options: AttentionOptions
    from_markdown: FromMarkdownExtension
    to_markdown: ToMarkdownExtension
    from_html: Mapping[str, ElementHandler]


def create_attention_extensions(options: AttentionOptions | Mapping[str, Any]) -> AttentionExtensions:
    """Build all three extensions from a single configuration.

    Raises
    ------
    InvalidConfigurationError
        If ``options`` is incomplete or invalid

    """
    options = AttentionOptions.coerce(options)
    return AttentionExtensions(
        options=options,
        from_markdown=attention_from_markdown(options),
        to_markdown=attention_to_markdown(options),
        from_html=attention_from_html(options),
    )


__all__ = [
    "CONSTRUCTS_WITHOUT_ATTENTION",
    "AttentionExtensions",
    "AttentionHandler",
    "attention_from_html",
    "attention_from_markdown",
    "attention_to_markdown",
    "create_attention_extensions",
]
