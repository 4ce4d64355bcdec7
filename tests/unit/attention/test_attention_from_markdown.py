#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/attention/test_attention_from_markdown.py
"""Unit tests for the token-to-AST attention extension.

The extension is driven directly through a CompileContext, without a
tokenizer, so the tests pin down exactly what the enter and exit handlers do.
"""

import pytest

from mdattention import InvalidConfigurationError, ParsingError, attention_from_markdown
from mdattention.ast import AttentionNode, Paragraph, Point, Position, Text
from mdattention.parsers import CompileContext, FromMarkdownExtension, Token


def _open_paragraph(extension: FromMarkdownExtension) -> CompileContext:
    context = CompileContext(extension.can_contain_eols)
    context.enter(Paragraph(), Token(type="paragraph"))
    return context


@pytest.mark.unit
class TestExtensionShape:
    """Tests for the tables of the generated extension."""

    def test_handlers_keyed_by_node_name(self, sub_options):
        """Test enter and exit handlers are registered for the node name only."""
        extension = attention_from_markdown(sub_options)
        assert isinstance(extension, FromMarkdownExtension)
        assert set(extension.enter) == {"sub"}
        assert set(extension.exit) == {"sub"}

    def test_can_contain_eols(self, sub_options):
        """Test the node name is declared able to contain line endings."""
        assert attention_from_markdown(sub_options).can_contain_eols == ("sub",)

    def test_mapping_configuration(self):
        """Test the factory accepts a mapping with camel-case keys."""
        extension = attention_from_markdown({"mdastNodeName": "sup", "hastNodeName": "sup", "char": "^"})
        assert set(extension.enter) == {"sup"}

    def test_invalid_configuration(self):
        """Test the factory fails before returning anything for a bad delimiter."""
        with pytest.raises(InvalidConfigurationError):
            attention_from_markdown({"mdastNodeName": "sub", "hastNodeName": "sub", "char": ""})

    def test_fresh_extension_per_call(self, sub_options):
        """Test repeated calls build independent extensions."""
        first = attention_from_markdown(sub_options)
        second = attention_from_markdown(sub_options)
        assert first is not second
        assert first.enter["sub"] is not second.enter["sub"]


@pytest.mark.unit
class TestEnterExit:
    """Tests for the node built between enter and exit."""

    def test_enter_appends_attention_node(self, sub_options):
        """Test entering opens an attention node under the current node."""
        extension = attention_from_markdown(sub_options)
        context = _open_paragraph(extension)

        extension.enter["sub"](context, Token(type="sub"))

        node = context.current
        assert isinstance(node, AttentionNode)
        assert node.type == "sub"
        assert node.children == []
        assert node.data == {"hName": "sub"}
        assert node.render_hint == "sub"
        assert context.stack[-2][0].children == [node]

    def test_render_hint_uses_tag_name(self):
        """Test the render hint is the HTML tag, not the node name."""
        extension = attention_from_markdown({"mdastNodeName": "highlight", "hastNodeName": "mark", "char": "="})
        context = _open_paragraph(extension)

        extension.enter["highlight"](context, Token(type="highlight"))

        assert context.current.type == "highlight"
        assert context.current.data == {"hName": "mark"}

    def test_exit_closes_node_with_children(self, sub_options):
        """Test children appended between enter and exit end up in the node."""
        extension = attention_from_markdown(sub_options)
        context = _open_paragraph(extension)
        token = Token(type="sub")

        extension.enter["sub"](context, token)
        context.append_text("x")
        extension.exit["sub"](context, token)

        paragraph = context.current
        assert paragraph.type == "paragraph"
        assert paragraph.children == [AttentionNode(type="sub", children=[Text(value="x")], data={"hName": "sub"})]

    def test_positions_come_from_tokens(self, sub_options):
        """Test the node spans from the token start to the token end."""
        extension = attention_from_markdown(sub_options)
        context = _open_paragraph(extension)
        token = Token(type="sub", start=Point(line=1, column=2, offset=1), end=Point(line=1, column=5, offset=4))

        extension.enter["sub"](context, token)
        context.append_text("x")
        extension.exit["sub"](context, token)

        node = context.current.children[0]
        assert node.position == Position(
            start=Point(line=1, column=2, offset=1), end=Point(line=1, column=5, offset=4)
        )

    def test_nested_attention(self, sub_options, sup_options):
        """Test spans of two configured syntaxes nest."""
        sub = attention_from_markdown(sub_options)
        sup = attention_from_markdown(sup_options)
        context = CompileContext(sub.can_contain_eols + sup.can_contain_eols)
        context.enter(Paragraph(), Token(type="paragraph"))

        sub.enter["sub"](context, Token(type="sub"))
        sup.enter["sup"](context, Token(type="sup"))
        context.append_text("n")
        sup.exit["sup"](context, Token(type="sup"))
        sub.exit["sub"](context, Token(type="sub"))

        outer = context.current.children[0]
        assert outer.type == "sub"
        assert outer.children[0].type == "sup"
        assert outer.children[0].children == [Text(value="n")]

    def test_line_ending_kept_inside_attention(self, sub_options):
        """Test a soft line break inside the span is kept as text."""
        extension = attention_from_markdown(sub_options)
        context = _open_paragraph(extension)

        extension.enter["sub"](context, Token(type="sub"))
        context.append_text("a")
        context.line_ending()
        context.append_text("b")

        assert context.current.children == [Text(value="a\nb")]

    def test_line_ending_dropped_without_declaration(self, sub_options):
        """Test a context unaware of the node name drops the line ending."""
        extension = attention_from_markdown(sub_options)
        context = CompileContext(())
        context.enter(Paragraph(), Token(type="paragraph"))

        extension.enter["sub"](context, Token(type="sub"))
        context.append_text("a")
        context.line_ending()
        context.append_text("b")

        assert context.current.children == [Text(value="ab")]


@pytest.mark.unit
class TestUnbalancedEvents:
    """Tests for exit events that do not match the open node."""

    def test_exit_with_other_type_raises(self, sub_options):
        """Test exiting while a different node is open raises ParsingError."""
        extension = attention_from_markdown(sub_options)
        context = _open_paragraph(extension)
        extension.enter["sub"](context, Token(type="sub"))
        context.enter(Paragraph(), Token(type="emphasis"))

        with pytest.raises(ParsingError) as exc_info:
            extension.exit["sub"](context, Token(type="sub"))
        assert exc_info.value.parsing_stage == "exit"
        assert exc_info.value.construct == "sub"

    def test_exit_without_open_node_raises(self, sub_options):
        """Test exiting at the document root raises ParsingError."""
        extension = attention_from_markdown(sub_options)
        context = CompileContext(extension.can_contain_eols)

        with pytest.raises(ParsingError):
            extension.exit["sub"](context, Token(type="sub"))
