#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/options/markdown.py
"""Configuration options for the markdown hosts.

This module defines options for the mistune-backed token-to-AST bridge and
for the AST-to-markdown serializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from mdattention.constants import DEFAULT_MISTUNE_PLUGINS, EMPHASIS_MARKER
from mdattention.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    plugins : tuple of str, default ("subscript", "superscript")
        mistune plugin names enabled while tokenizing. Attention syntaxes are
        scanned by these plugins, not by mdattention.
    token_names : dict, default empty
        Extra mistune token type to construct name mappings, applied over the
        built-in table. Use this to route a mistune token to the node name an
        attention extension was configured with, e.g. ``{"subscript": "sub"}``.

    """

    plugins: tuple[str, ...] = field(
        default=DEFAULT_MISTUNE_PLUGINS,
        metadata={"help": "mistune plugins used to tokenize the input", "importance": "core"},
    )
    token_names: dict[str, str] = field(
        default_factory=dict,
        metadata={"help": "mistune token type -> construct name overrides", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Normalize plugin list.

        Raises
        ------
        ValueError
            If a plugin name is empty.

        """
        if isinstance(self.plugins, list):
            object.__setattr__(self, "plugins", tuple(self.plugins))
        if any(not plugin for plugin in self.plugins):
            raise ValueError(f"plugins must be non-empty names, got {self.plugins!r}")


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Markdown serialization.

    Parameters
    ----------
    emphasis_marker : {"*", "_"}, default "*"
        Marker used for emphasis; strong uses it doubled.
    join_blocks : str, default "\\n\\n"
        Separator placed between block-level children of the root.

    """

    emphasis_marker: Literal["*", "_"] = field(
        default=EMPHASIS_MARKER,
        metadata={"help": "Marker for emphasis (strong doubles it)", "choices": ["*", "_"], "importance": "core"},
    )
    join_blocks: str = field(
        default="\n\n",
        metadata={"help": "Separator between block-level nodes", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate marker choice.

        Raises
        ------
        ValueError
            If the emphasis marker is not supported.

        """
        if self.emphasis_marker not in ("*", "_"):
            raise ValueError(f"emphasis_marker must be '*' or '_', got {self.emphasis_marker!r}")
