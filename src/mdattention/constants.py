#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdattention.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Attention Defaults - Options shared by the three attention extensions
3. Markdown Parsing - mistune plugins and token name mapping
4. Markdown Serialization - construct names and output markers
5. HTML Conversion - tag groups recognised by the HTML host
6. Dependency Specifications - optional third-party packages
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ReferenceType = Literal["shortcut", "collapsed", "full"]

# =============================================================================
# Attention Defaults
# =============================================================================

# Data key under which the HTML render hint is stored on attention nodes
RENDER_HINT_KEY = "hName"

# Camel-case keys accepted by AttentionOptions.from_dict
OPTION_KEY_ALIASES = {
    "mdastNodeName": "source_node_name",
    "sourceNodeName": "source_node_name",
    "hastNodeName": "target_tag_name",
    "targetTagName": "target_tag_name",
    "char": "delimiter_char",
    "delimiterChar": "delimiter_char",
}

# =============================================================================
# Markdown Parsing
# =============================================================================

# mistune plugins enabled when MarkdownParserOptions.plugins is left unset
DEFAULT_MISTUNE_PLUGINS: tuple[str, ...] = ("subscript", "superscript")

# mistune token type -> construct name used by enter/exit handlers
DEFAULT_TOKEN_NAMES: dict[str, str] = {
    "paragraph": "paragraph",
    "block_text": "paragraph",
    "heading": "heading",
    "text": "text",
    "emphasis": "emphasis",
    "strong": "strong",
    "codespan": "inlineCode",
    "link": "link",
    "linebreak": "break",
    "softbreak": "lineEnding",
    "strikethrough": "delete",
    "subscript": "subscript",
    "superscript": "superscript",
    "mark": "mark",
    "insert": "insert",
}

# Node types that keep soft line breaks as "\n" text
DEFAULT_CAN_CONTAIN_EOLS: tuple[str, ...] = ("emphasis", "heading", "link", "paragraph", "strong")

# mistune tokens that carry no content for the AST
IGNORED_TOKEN_TYPES = frozenset({"blank_line"})

# =============================================================================
# Markdown Serialization
# =============================================================================

ConstructName = str

# Markers emitted by the base serializer handlers
EMPHASIS_MARKER = "*"
HARD_BREAK = "\\\n"

# Characters that take a backslash escape (ASCII punctuation)
ASCII_PUNCTUATION = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"

# =============================================================================
# HTML Conversion
# =============================================================================

HTML_SKIPPED_TAGS = frozenset({"script", "style", "template", "head", "title", "meta", "link"})
HTML_HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.9.0")]
