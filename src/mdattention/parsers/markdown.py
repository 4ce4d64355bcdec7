#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/parsers/markdown.py
"""Markdown to AST converter.

This module turns markdown into the mdast-shaped AST in two steps. mistune
tokenizes the text (its plugins decide which syntaxes exist, including the
single-character attention spans from its ``subscript``/``superscript``/
``mark``/``insert`` plugins). The token tree is then replayed as a flat
stream of ``enter``/``exit`` events against a :class:`CompileContext`, which
keeps the stack of open nodes. Handlers for those events are looked up by
construct name in tables that extensions (see :class:`FromMarkdownExtension`)
can add to.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

from mdattention.ast.nodes import (
    Break,
    Emphasis,
    Heading,
    InlineCode,
    Link,
    Node,
    Paragraph,
    Parent,
    Point,
    Position,
    Root,
    Strong,
    Text,
)
from mdattention.constants import DEFAULT_CAN_CONTAIN_EOLS, DEFAULT_TOKEN_NAMES, DEPS_MARKDOWN, IGNORED_TOKEN_TYPES
from mdattention.exceptions import InvalidOptionsError, ParsingError
from mdattention.options.markdown import MarkdownParserOptions
from mdattention.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """A named span reported by the tokenizer.

    Parameters
    ----------
    type : str
        Construct name the event is dispatched on
    start : Point or None, default None
        Start of the span, when the tokenizer reports positions
    end : Point or None, default None
        End of the span, when the tokenizer reports positions
    attrs : dict, default empty
        Token payload (link destination, heading level, literal text, ...)

    """

    type: str
    start: Optional[Point] = None
    end: Optional[Point] = None
    attrs: Mapping[str, Any] = field(default_factory=dict)


EventHandler = Callable[["CompileContext", Token], None]


@dataclass(frozen=True)
class FromMarkdownExtension:
    """Token-to-AST bridge extension.

    Parameters
    ----------
    can_contain_eols : tuple of str, default ()
        Node types inside which soft line breaks are kept as ``"\\n"`` text
    enter : mapping, default empty
        Construct name to handler called when the construct opens
    exit : mapping, default empty
        Construct name to handler called when the construct closes

    """

    can_contain_eols: tuple[str, ...] = ()
    enter: Mapping[str, EventHandler] = field(default_factory=dict)
    exit: Mapping[str, EventHandler] = field(default_factory=dict)


class CompileContext:
    """Stack of open nodes while a token stream is compiled.

    Handlers call :meth:`enter` to open a node under the current one and
    :meth:`exit` to close it again. One context serves one document.

    Parameters
    ----------
    can_contain_eols : iterable of str
        Node types that keep soft line breaks

    """

    def __init__(self, can_contain_eols: Iterable[str]):
        self.can_contain_eols = frozenset(can_contain_eols)
        self.root = Root()
        self.stack: list[tuple[Parent, Token]] = [(self.root, Token(type="root"))]

    @property
    def current(self) -> Parent:
        """The innermost open node."""
        return self.stack[-1][0]

    def enter(self, node: Parent, token: Token) -> Parent:
        """Append ``node`` to the current node and make it current."""
        if token.start is not None:
            node.position = Position(start=token.start)
        self.current.children.append(node)
        self.stack.append((node, token))
        return node

    def exit(self, token: Token) -> Parent:
        """Close the current node, which must have been opened by ``token``.

        Raises
        ------
        ParsingError
            If the innermost open node was opened for a different construct
            or no node is open

        """
        if len(self.stack) == 1:
            raise ParsingError(
                f"Cannot close `{token.type}`, no node is open", parsing_stage="exit", construct=token.type
            )

        node, open_token = self.stack[-1]
        if open_token.type != token.type:
            raise ParsingError(
                f"Cannot close `{token.type}`, a different node (`{open_token.type}`) is open",
                parsing_stage="exit",
                construct=token.type,
            )

        self.stack.pop()
        if token.end is not None and node.position is not None:
            node.position = Position(start=node.position.start, end=token.end)
        return node

    def append(self, node: Node) -> None:
        """Add a leaf node to the current node."""
        self.current.children.append(node)

    def append_text(self, value: str) -> None:
        """Add text, merging with a directly preceding text node."""
        children = self.current.children
        if children and isinstance(children[-1], Text):
            children[-1].value += value
        else:
            children.append(Text(value=value))

    def line_ending(self) -> None:
        """Handle a soft line break in the current node."""
        if self.current.type in self.can_contain_eols:
            self.append_text("\n")


# ============================================================================
# Base handlers
# ============================================================================


def _enter_parent(factory: Callable[[Token], Parent]) -> EventHandler:
    def handler(context: CompileContext, token: Token) -> None:
        context.enter(factory(token), token)

    return handler


def _exit_parent(context: CompileContext, token: Token) -> None:
    context.exit(token)


def _heading_factory(token: Token) -> Parent:
    level = token.attrs.get("level", 1)
    if not isinstance(level, int) or not 1 <= level <= 6:
        level = 1
    return Heading(depth=level)


def _link_factory(token: Token) -> Parent:
    return Link(url=token.attrs.get("url", ""), title=token.attrs.get("title"))


def _enter_text(context: CompileContext, token: Token) -> None:
    context.append_text(token.attrs.get("raw", ""))


def _enter_inline_code(context: CompileContext, token: Token) -> None:
    context.append(InlineCode(value=token.attrs.get("raw", "")))


def _enter_break(context: CompileContext, token: Token) -> None:
    context.append(Break())


def _enter_line_ending(context: CompileContext, token: Token) -> None:
    context.line_ending()


def _leaf_exit(context: CompileContext, token: Token) -> None:
    return None


BASE_EXTENSION = FromMarkdownExtension(
    can_contain_eols=DEFAULT_CAN_CONTAIN_EOLS,
    enter={
        "paragraph": _enter_parent(lambda token: Paragraph()),
        "heading": _enter_parent(_heading_factory),
        "emphasis": _enter_parent(lambda token: Emphasis()),
        "strong": _enter_parent(lambda token: Strong()),
        "link": _enter_parent(_link_factory),
        "text": _enter_text,
        "inlineCode": _enter_inline_code,
        "break": _enter_break,
        "lineEnding": _enter_line_ending,
    },
    exit={
        "paragraph": _exit_parent,
        "heading": _exit_parent,
        "emphasis": _exit_parent,
        "strong": _exit_parent,
        "link": _exit_parent,
        "text": _leaf_exit,
        "inlineCode": _leaf_exit,
        "break": _leaf_exit,
        "lineEnding": _leaf_exit,
    },
)


class MarkdownToAstConverter:
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options
    extensions : iterable of FromMarkdownExtension, default = ()
        Extensions merged over the base handlers, in order

    Examples
    --------
        >>> from mdattention import AttentionOptions, attention_from_markdown
        >>> sub = AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
        >>> converter = MarkdownToAstConverter(
        ...     MarkdownParserOptions(token_names={"subscript": "sub"}),
        ...     extensions=[attention_from_markdown(sub)],
        ... )
        >>> doc = converter.parse("H~2~O")

    """

    def __init__(
        self,
        options: MarkdownParserOptions | None = None,
        extensions: Iterable[FromMarkdownExtension] = (),
    ):
        """Initialize the parser with options and extensions."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise InvalidOptionsError(
                converter_name="markdown", expected_type=MarkdownParserOptions, received_type=type(options)
            )
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()
        self.token_names: dict[str, str] = {**DEFAULT_TOKEN_NAMES, **self.options.token_names}

        can_contain_eols: list[str] = []
        self.enter_handlers: dict[str, EventHandler] = {}
        self.exit_handlers: dict[str, EventHandler] = {}
        for extension in (BASE_EXTENSION, *extensions):
            can_contain_eols.extend(extension.can_contain_eols)
            self.enter_handlers.update(extension.enter)
            self.exit_handlers.update(extension.exit)
        self.can_contain_eols = tuple(can_contain_eols)

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, markdown_content: str) -> Root:
        """Parse markdown text into an AST root.

        Parameters
        ----------
        markdown_content : str
            Markdown source

        Returns
        -------
        Root
            AST root node

        Raises
        ------
        ParsingError
            If the token stream does not produce balanced events

        """
        import mistune

        markdown = mistune.create_markdown(renderer=None, plugins=list(self.options.plugins))
        tokens, _state = markdown.parse(markdown_content)
        logger.debug("mistune produced %d block tokens", len(tokens))
        return self.compile(tokens)

    def compile(self, tokens: list[dict[str, Any]]) -> Root:
        """Build an AST from a mistune token tree.

        Parameters
        ----------
        tokens : list of dict
            mistune tokens (``renderer=None`` output)

        Returns
        -------
        Root
            AST root node

        """
        context = CompileContext(self.can_contain_eols)
        for token in tokens:
            self._replay(context, token)

        if len(context.stack) != 1:
            open_types = ", ".join(f"`{token.type}`" for _, token in context.stack[1:])
            raise ParsingError(
                f"Document ended with open nodes: {open_types}",
                parsing_stage="compile",
                construct=context.stack[-1][1].type,
            )
        return context.root

    def _replay(self, context: CompileContext, raw_token: dict[str, Any]) -> None:
        """Emit enter, nested children and exit events for one mistune token."""
        token_type = raw_token.get("type", "")
        if token_type in IGNORED_TOKEN_TYPES:
            return

        name = self.token_names.get(token_type, token_type)
        enter = self.enter_handlers.get(name)
        exit_handler = self.exit_handlers.get(name)
        if enter is None or exit_handler is None:
            children = raw_token.get("children") or []
            if not children:
                logger.warning("Skipping unsupported markdown token: %s", token_type)
                return
            # Containers without handlers (lists, quotes, images) are transparent
            logger.warning("Unwrapping unsupported markdown token: %s", token_type)
            for child in children:
                self._replay(context, child)
            return

        attrs = dict(raw_token.get("attrs") or {})
        if "raw" in raw_token:
            attrs["raw"] = raw_token["raw"]
        token = Token(type=name, attrs=attrs)

        enter(context, token)
        for child in raw_token.get("children") or []:
            self._replay(context, child)
        exit_handler(context, token)


def markdown_to_ast(
    markdown_content: str,
    options: MarkdownParserOptions | None = None,
    extensions: Iterable[FromMarkdownExtension] = (),
) -> Root:
    """Parse markdown text into an AST root.

    Convenience wrapper around :class:`MarkdownToAstConverter`.
    """
    return MarkdownToAstConverter(options, extensions).parse(markdown_content)
