#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/parsers/__init__.py
"""Hosts that build an AST: markdown (via mistune) and HTML (via BeautifulSoup).

Both modules import their third-party parser lazily, inside the decorated
``parse`` methods, so importing this package does not require them.
"""

from mdattention.parsers.html import HtmlToAstConverter, HtmlToAstState, html_to_ast
from mdattention.parsers.markdown import (
    CompileContext,
    FromMarkdownExtension,
    MarkdownToAstConverter,
    Token,
    markdown_to_ast,
)

__all__ = [
    "CompileContext",
    "FromMarkdownExtension",
    "HtmlToAstConverter",
    "HtmlToAstState",
    "MarkdownToAstConverter",
    "Token",
    "html_to_ast",
    "markdown_to_ast",
]
