#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/options/html.py
"""Configuration options for the HTML-to-AST host."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdattention.options.base import BaseParserOptions


@dataclass(frozen=True)
class HtmlOptions(BaseParserOptions):
    """Configuration options for HTML-to-AST conversion.

    Parameters
    ----------
    parser : str, default "html.parser"
        BeautifulSoup tree builder. ``html.parser`` records source line and
        column for every tag, which ``state.patch`` copies onto nodes.
    collapse_whitespace : bool, default True
        Collapse runs of whitespace in text to a single space.

    """

    parser: str = field(
        default="html.parser",
        metadata={"help": "BeautifulSoup tree builder", "importance": "advanced"},
    )
    collapse_whitespace: bool = field(
        default=True,
        metadata={"help": "Collapse whitespace runs in text nodes", "importance": "core"},
    )
