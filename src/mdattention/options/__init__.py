#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdattention.

Dataclass-based, immutable configuration for the attention extensions and
for the markdown and HTML hosts they plug into.
"""

from __future__ import annotations

from mdattention.options.attention import AttentionOptions
from mdattention.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdattention.options.html import HtmlOptions
from mdattention.options.markdown import MarkdownParserOptions, MarkdownRendererOptions

__all__ = [
    "AttentionOptions",
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
]
