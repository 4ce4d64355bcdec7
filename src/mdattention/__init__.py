"""mdattention - single character attention syntaxes for markdown pipelines.

mdattention generates the extensions a markdown toolchain needs to support a
family of inline "attention" spans: text delimited on both sides by the same
character, like ``~subscript~`` or ``^superscript^``. Each syntax is
configured once with an AST node name, an HTML tag name and a delimiter, and
yields three paired extensions:

- a token-to-AST extension for :class:`~mdattention.parsers.MarkdownToAstConverter`
- an AST-to-markdown extension for :class:`~mdattention.renderers.MarkdownRenderer`
- an HTML-to-AST extension for :class:`~mdattention.parsers.HtmlToAstConverter`

Requirements
------------
- Python 3.10+
- mistune for markdown parsing, beautifulsoup4 for HTML conversion
  (imported lazily by the hosts; the factories and the serializer need neither)

Examples
--------
    >>> from mdattention import AttentionOptions, create_attention_extensions
    >>> from mdattention.parsers import MarkdownToAstConverter
    >>> from mdattention.options import MarkdownParserOptions
    >>> from mdattention.renderers import MarkdownRenderer
    >>>
    >>> sub = create_attention_extensions(
    ...     AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
    ... )
    >>> parser = MarkdownToAstConverter(
    ...     MarkdownParserOptions(token_names={"subscript": "sub"}), extensions=[sub.from_markdown]
    ... )
    >>> doc = parser.parse("H~2~O")
    >>> MarkdownRenderer(extensions=[sub.to_markdown]).render_to_string(doc)
    'H~2~O'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from mdattention.attention import (
    CONSTRUCTS_WITHOUT_ATTENTION,
    AttentionExtensions,
    AttentionHandler,
    attention_from_html,
    attention_from_markdown,
    attention_to_markdown,
    create_attention_extensions,
)
from mdattention.exceptions import (
    DependencyError,
    InvalidConfigurationError,
    MdAttentionError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdattention.options import AttentionOptions

__version__ = "0.1.0"

__all__ = [
    "CONSTRUCTS_WITHOUT_ATTENTION",
    "AttentionExtensions",
    "AttentionHandler",
    "AttentionOptions",
    "DependencyError",
    "InvalidConfigurationError",
    "MdAttentionError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
    "attention_from_html",
    "attention_from_markdown",
    "attention_to_markdown",
    "create_attention_extensions",
    "__version__",
]
