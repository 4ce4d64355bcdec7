"""Test utilities for the mdattention test suite.

Helpers for building small trees and running the three hosts with a set of
attention syntaxes.
"""

from mdattention import AttentionOptions, create_attention_extensions
from mdattention.ast import AttentionNode, Paragraph, Root, Text
from mdattention.options import MarkdownParserOptions
from mdattention.parsers import HtmlToAstConverter, MarkdownToAstConverter
from mdattention.renderers import MarkdownRenderer

SUB = AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
SUP = AttentionOptions(source_node_name="sup", target_tag_name="sup", delimiter_char="^")

# mistune token types of the subscript/superscript plugins, mapped to the
# configured node names above.
TOKEN_NAMES = {"subscript": "sub", "superscript": "sup"}


def attention(node_type: str, *values: str) -> AttentionNode:
    """Build an attention node whose children are text nodes."""
    return AttentionNode(type=node_type, children=[Text(value=value) for value in values])


def paragraph(*children) -> Paragraph:
    """Wrap phrasing nodes in a paragraph."""
    return Paragraph(children=list(children))


def document(*children) -> Root:
    """Wrap nodes in a root."""
    return Root(children=list(children))


def make_renderer(*options: AttentionOptions) -> MarkdownRenderer:
    """Create a markdown renderer with the serializer extension of each syntax."""
    return MarkdownRenderer(extensions=[create_attention_extensions(o).to_markdown for o in options])


def make_markdown_parser(*options: AttentionOptions) -> MarkdownToAstConverter:
    """Create a markdown parser with the bridge extension of each syntax."""
    return MarkdownToAstConverter(
        MarkdownParserOptions(token_names=TOKEN_NAMES),
        extensions=[create_attention_extensions(o).from_markdown for o in options],
    )


def make_html_converter(*options: AttentionOptions) -> HtmlToAstConverter:
    """Create an HTML converter with the element extension of each syntax."""
    return HtmlToAstConverter(extensions=[create_attention_extensions(o).from_html for o in options])
