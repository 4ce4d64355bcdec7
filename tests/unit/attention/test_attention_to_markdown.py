#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/attention/test_attention_to_markdown.py
"""Unit tests for the AST-to-markdown attention extension.

Tests cover:
- The handler output and its peek
- Escaping of the delimiter in ordinary phrasing
- Suppressed escaping inside constructs that cannot contain attention
- Independence of syntaxes configured with different delimiters
"""

import pytest
from utils import SUB, SUP, attention, make_markdown_parser, make_renderer, paragraph

from mdattention import (
    CONSTRUCTS_WITHOUT_ATTENTION,
    AttentionHandler,
    AttentionOptions,
    InvalidConfigurationError,
    RenderingError,
    attention_to_markdown,
)
from mdattention.ast import AttentionNode, Emphasis, Link, LinkReference, Text
from mdattention.renderers import FULL_PHRASING_SPANS, MarkdownRenderer, SafeInfo, ToMarkdownExtension, UnsafePattern


@pytest.mark.unit
class TestExtensionShape:
    """Tests for the handler table and unsafe pattern of the extension."""

    def test_single_handler_for_node_name(self):
        """Test the extension registers exactly one handler, for the node name."""
        extension = attention_to_markdown(SUB)
        assert isinstance(extension, ToMarkdownExtension)
        assert list(extension.handlers) == ["sub"]
        assert isinstance(extension.handlers["sub"], AttentionHandler)

    def test_single_unsafe_pattern(self):
        """Test the unsafe pattern escapes the delimiter in phrasing only."""
        (pattern,) = attention_to_markdown(SUB).unsafe
        assert pattern == UnsafePattern(
            character="~", in_construct=("phrasing",), not_in_construct=CONSTRUCTS_WITHOUT_ATTENTION
        )
        assert pattern.before is None
        assert pattern.after is None
        assert pattern.at_break is False

    def test_constructs_without_attention_match_host(self):
        """Test the excluded constructs are the host's full-phrasing spans."""
        assert CONSTRUCTS_WITHOUT_ATTENTION == FULL_PHRASING_SPANS
        assert set(CONSTRUCTS_WITHOUT_ATTENTION) == {
            "autolink",
            "destinationLiteral",
            "destinationRaw",
            "reference",
            "titleQuote",
            "titleApostrophe",
        }

    def test_invalid_configuration(self):
        """Test a missing delimiter fails when the extension is built."""
        with pytest.raises(InvalidConfigurationError):
            attention_to_markdown({"mdastNodeName": "sub", "hastNodeName": "sub"})

    def test_handler_repr(self):
        """Test the handler describes its syntax."""
        assert repr(attention_to_markdown(SUB).handlers["sub"]) == "AttentionHandler('sub', '~')"


@pytest.mark.unit
class TestAttentionHandler:
    """Tests for calling the handler directly."""

    def test_wraps_children_in_delimiter(self, sub_renderer):
        """Test a node with text `x` serializes to `~x~`."""
        state = sub_renderer.create_state()
        handler = sub_renderer.handlers["sub"]

        assert handler(attention("sub", "x"), None, state, SafeInfo()) == "~x~"

    def test_empty_children(self, sub_renderer):
        """Test a node without children serializes to the delimiter twice."""
        state = sub_renderer.create_state()
        handler = sub_renderer.handlers["sub"]

        assert handler(AttentionNode(type="sub", children=[]), None, state, SafeInfo()) == "~~"

    def test_construct_stack_restored(self, sub_renderer):
        """Test the handler leaves the construct stack as it found it."""
        state = sub_renderer.create_state()
        state.stack.extend(["paragraph", "phrasing"])

        sub_renderer.handlers["sub"](attention("sub", "x"), None, state, SafeInfo())

        assert state.stack == ["paragraph", "phrasing"]

    def test_construct_stack_restored_on_error(self, sub_renderer):
        """Test the node's construct is closed even when a child fails."""
        state = sub_renderer.create_state()
        node = AttentionNode(type="sub", children=[AttentionNode(type="unknown")])

        with pytest.raises(RenderingError):
            sub_renderer.handlers["sub"](node, None, state, SafeInfo())
        assert state.stack == []

    def test_peek_returns_delimiter(self, sub_renderer):
        """Test peek reports the delimiter without serializing."""
        state = sub_renderer.create_state()
        handler = sub_renderer.handlers["sub"]
        node = attention("sub", "x")

        assert handler.peek(node, None, state, SafeInfo()) == "~"
        assert handler.peek(node, None, state, SafeInfo()) == handler(node, None, state, SafeInfo())[0]

    def test_handler_ignores_render_hint(self, sub_renderer):
        """Test data on the node does not change its markdown form."""
        node = AttentionNode(type="sub", children=[Text(value="x")], data={"hName": "span"})
        assert sub_renderer.render_to_string(paragraph(node)) == "~x~"


@pytest.mark.unit
class TestDelimiterEscaping:
    """Tests for the delimiter in text around and inside attention spans."""

    def test_spec_example(self, sub_renderer):
        """Test the example `H~2~O`."""
        tree = paragraph(Text(value="H"), attention("sub", "2"), Text(value="O"))
        assert sub_renderer.render_to_string(tree) == "H~2~O"

    def test_empty_span_in_paragraph(self, sub_renderer):
        """Test an empty span in a paragraph."""
        assert sub_renderer.render_to_string(paragraph(AttentionNode(type="sub"))) == "~~"

    def test_delimiter_escaped_in_text(self, sub_renderer):
        """Test a literal delimiter in ordinary text is backslash escaped."""
        assert sub_renderer.render_to_string(paragraph(Text(value="a~b"))) == "a\\~b"

    def test_every_delimiter_in_text_escaped(self, sub_renderer):
        """Test each occurrence is escaped."""
        assert sub_renderer.render_to_string(paragraph(Text(value="a~b~c"))) == "a\\~b\\~c"

    def test_delimiter_escaped_inside_span(self, sub_renderer):
        """Test the delimiter inside the span's own text is escaped."""
        tree = paragraph(attention("sub", "a~b"))
        assert sub_renderer.render_to_string(tree) == "~a\\~b~"

    def test_delimiter_escaped_in_emphasis(self, sub_renderer):
        """Test emphasis is phrasing, so the delimiter is escaped there too."""
        tree = paragraph(Emphasis(children=[Text(value="a~b")]))
        assert sub_renderer.render_to_string(tree) == "*a\\~b*"

    def test_without_extension_delimiter_mid_text_kept(self):
        """Test the host alone does not escape `~` in the middle of a line."""
        assert MarkdownRenderer().render_to_string(paragraph(Text(value="a~b"))) == "a~b"

    def test_non_punctuation_delimiter_uses_character_reference(self):
        """Test a delimiter that cannot be backslash escaped is encoded."""
        dot = AttentionOptions(source_node_name="dot", target_tag_name="span", delimiter_char="•")
        renderer = make_renderer(dot)
        assert renderer.render_to_string(paragraph(Text(value="a•b"))) == "a&#x2022;b"

    def test_non_punctuation_delimiter_wraps_span(self):
        """Test the span itself is written with the raw delimiter."""
        dot = AttentionOptions(source_node_name="dot", target_tag_name="span", delimiter_char="•")
        renderer = make_renderer(dot)
        assert renderer.render_to_string(paragraph(attention("dot", "x"))) == "•x•"


@pytest.mark.unit
class TestConstructsWithoutAttention:
    """Tests for constructs in which the delimiter is left alone."""

    def test_raw_destination(self, sub_renderer):
        """Test a link destination is not escaped."""
        tree = paragraph(Link(url="https://example.com/a~b", children=[Text(value="link")]))
        assert sub_renderer.render_to_string(tree) == "[link](https://example.com/a~b)"

    def test_literal_destination(self, sub_renderer):
        """Test a destination written in angle brackets is not escaped."""
        tree = paragraph(Link(url="a b~c", children=[Text(value="link")]))
        assert sub_renderer.render_to_string(tree) == "[link](<a b~c>)"

    def test_title(self, sub_renderer):
        """Test a link title is not escaped."""
        tree = paragraph(Link(url="https://example.com", title="x~y", children=[Text(value="t")]))
        assert sub_renderer.render_to_string(tree) == '[t](https://example.com "x~y")'

    def test_label_is_still_phrasing(self, sub_renderer):
        """Test the link text is phrasing and keeps escaping."""
        tree = paragraph(Link(url="https://example.com", children=[Text(value="a~b")]))
        assert sub_renderer.render_to_string(tree) == "[a\\~b](https://example.com)"

    def test_autolink(self, sub_renderer):
        """Test an autolink is not escaped."""
        url = "https://example.com/~user"
        tree = paragraph(Link(url=url, children=[Text(value=url)]))
        assert sub_renderer.render_to_string(tree) == "<https://example.com/~user>"

    def test_reference(self, sub_renderer):
        """Test the reference part of a link reference is not escaped."""
        tree = paragraph(
            LinkReference(identifier="a~b", label="a~b", reference_type="full", children=[Text(value="text")])
        )
        assert sub_renderer.render_to_string(tree) == "[text][a~b]"


@pytest.mark.unit
class TestIndependentSyntaxes:
    """Tests for two syntaxes with different delimiters."""

    def test_sub_does_not_escape_caret(self):
        """Test the subscript extension leaves `^` alone."""
        assert make_renderer(SUB).render_to_string(paragraph(Text(value="a^b"))) == "a^b"

    def test_sup_does_not_escape_tilde(self):
        """Test the superscript extension leaves `~` alone."""
        assert make_renderer(SUP).render_to_string(paragraph(Text(value="a~b"))) == "a~b"

    def test_sup_escapes_caret(self):
        """Test the superscript extension escapes its own delimiter."""
        assert make_renderer(SUP).render_to_string(paragraph(Text(value="a^b"))) == "a\\^b"

    def test_both_extensions(self):
        """Test two registered syntaxes each escape their own delimiter."""
        renderer = make_renderer(SUB, SUP)
        tree = paragraph(Text(value="x"), attention("sub", "a^b"), attention("sup", "2"))
        assert renderer.render_to_string(tree) == "x~a\\^b~^2^"

    def test_nested_spans(self):
        """Test a span of one syntax inside the other."""
        renderer = make_renderer(SUB, SUP)
        tree = paragraph(AttentionNode(type="sub", children=[attention("sup", "n")]))
        assert renderer.render_to_string(tree) == "~^n^~"

    def test_nested_same_syntax_does_not_round_trip(self):
        """Test a span nested in a span of the same syntax doubles the delimiter.

        Nothing is escaped between the two opening delimiters, so the output
        is not read back as the same nesting.
        """
        tree = paragraph(AttentionNode(type="sub", children=[attention("sub", "x")]))
        markdown = make_renderer(SUB).render_to_string(tree)
        assert markdown == "~~x~~"
        parsed = make_markdown_parser(SUB).parse(markdown).children[0]
        nested = [node for node in parsed.children if node.type == "sub" and [c.type for c in node.children] == ["sub"]]
        assert nested == []

    def test_two_instances_with_same_syntax_agree(self):
        """Test building the extension twice gives the same serialization."""
        tree = paragraph(Text(value="a~"), attention("sub", "x"))
        assert make_renderer(SUB).render_to_string(tree) == make_renderer(SUB).render_to_string(tree)


@pytest.mark.unit
class TestPeekForSiblings:
    """Tests for the peek being used by a previous sibling."""

    def test_previous_sibling_sees_delimiter(self):
        """Test a pattern that depends on the next character sees the delimiter."""
        colon_before_tilde = ToMarkdownExtension(
            unsafe=(UnsafePattern(character=":", after="~", in_construct=("phrasing",)),)
        )
        renderer = MarkdownRenderer(extensions=[attention_to_markdown(SUB), colon_before_tilde])
        tree = paragraph(Text(value="a:"), attention("sub", "x"))
        assert renderer.render_to_string(tree) == "a\\:~x~"

    def test_pattern_not_triggered_by_other_sibling(self):
        """Test the same pattern does not fire before plain text."""
        colon_before_tilde = ToMarkdownExtension(
            unsafe=(UnsafePattern(character=":", after="~", in_construct=("phrasing",)),)
        )
        renderer = MarkdownRenderer(extensions=[attention_to_markdown(SUB), colon_before_tilde])
        tree = paragraph(Text(value="a:"), Emphasis(children=[Text(value="x")]))
        assert renderer.render_to_string(tree) == "a:*x*"
