#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/renderers/markdown.py
"""Markdown serialization from AST.

This module provides the :class:`MarkdownRenderer`, which turns an AST back
into markdown text, and the :class:`SerializerState` that handlers receive
while it runs.

Serialization is table driven: every node type maps to a handler
``(node, parent, state, info) -> str``. Handlers keep track of the syntactic
construct they are emitting with ``state.enter(name)``, serialize phrasing
children with ``state.container_phrasing`` and pass literal text through
``state.safe`` so characters that would be misread as syntax get escaped.
Handlers may expose a ``peek`` method returning the first character they
would emit; siblings use it to decide how to escape their own last character.

Extensions (see :class:`ToMarkdownExtension`) contribute extra handlers and
unsafe patterns.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence

from mdattention.ast.nodes import (
    Break,
    Emphasis,
    Heading,
    InlineCode,
    Link,
    LinkReference,
    Node,
    Paragraph,
    Parent,
    Root,
    Strong,
    Text,
    is_phrasing,
)
from mdattention.ast.utils import extract_text
from mdattention.constants import ASCII_PUNCTUATION, HARD_BREAK, ConstructName
from mdattention.exceptions import InvalidOptionsError, RenderingError
from mdattention.options.markdown import MarkdownRendererOptions
from mdattention.renderers.tracking import SafeInfo, Tracker
from mdattention.renderers.unsafe import BASE_UNSAFE, FULL_PHRASING_SPANS, UnsafePattern, escape_backslashes

logger = logging.getLogger(__name__)

__all__ = [
    "FULL_PHRASING_SPANS",
    "Handle",
    "MarkdownRenderer",
    "PeekableHandler",
    "SerializerState",
    "ToMarkdownExtension",
    "peekable",
]


class Handle(Protocol):
    """Signature of a serializer handler."""

    def __call__(self, node: Any, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str: ...


@dataclass(frozen=True)
class ToMarkdownExtension:
    """Serializer extension.

    Parameters
    ----------
    unsafe : tuple of UnsafePattern, default ()
        Extra unsafe patterns to honour in ``state.safe``
    handlers : mapping, default empty
        Node type to handler; later extensions override earlier ones

    """

    unsafe: tuple[UnsafePattern, ...] = ()
    handlers: Mapping[str, Handle] = field(default_factory=dict)


class PeekableHandler:
    """Handler paired with a cheap function reporting its first character."""

    def __init__(self, handle: Callable[..., str], peek: Callable[..., str]):
        self._handle = handle
        self._peek = peek
        self.__name__ = getattr(handle, "__name__", type(self).__name__)

    def __call__(self, node: Any, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
        return self._handle(node, parent, state, info)

    def peek(self, node: Any, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
        return self._peek(node, parent, state, info)


def peekable(peek: Callable[..., str]) -> Callable[[Callable[..., str]], PeekableHandler]:
    """Attach ``peek`` to a handler function."""

    def decorator(handle: Callable[..., str]) -> PeekableHandler:
        return PeekableHandler(handle, peek)

    return decorator


class SerializerState:
    """Mutable state of one serialization run.

    A state is created per :meth:`MarkdownRenderer.render_to_string` call and
    discarded afterwards, so independent runs never share a construct stack.

    Parameters
    ----------
    handlers : mapping
        Node type to handler
    unsafe : sequence of UnsafePattern
        Patterns checked by :meth:`safe`
    options : MarkdownRendererOptions
        Renderer options, readable by handlers

    Attributes
    ----------
    stack : list of str
        Names of the constructs currently open, innermost last

    """

    def __init__(
        self,
        handlers: Mapping[str, Handle],
        unsafe: Sequence[UnsafePattern],
        options: MarkdownRendererOptions,
    ):
        self.handlers = dict(handlers)
        self.unsafe = tuple(unsafe)
        self.options = options
        self.stack: list[ConstructName] = []

    def enter(self, construct: ConstructName) -> Callable[[], None]:
        """Open ``construct`` and return a callable that closes it."""
        self.stack.append(construct)

        def exit_construct() -> None:
            popped = self.stack.pop()
            if popped != construct:
                raise RenderingError(
                    f"Cannot close `{construct}`, innermost open construct is `{popped}`",
                    rendering_stage="construct",
                    node_type=construct,
                )

        return exit_construct

    def handle(self, node: Node, parent: Optional[Parent], info: SafeInfo) -> str:
        """Serialize one node with the handler registered for its type."""
        handler = self.handlers.get(node.type)
        if handler is None:
            raise RenderingError(
                f"Cannot handle unknown node `{node.type}`", rendering_stage="handle", node_type=node.type
            )
        return handler(node, parent, self, info)

    def peek(self, node: Node, parent: Optional[Parent], info: SafeInfo) -> str:
        """Return the first character ``node`` serializes to, or ``""``."""
        handler = self.handlers.get(node.type)
        if handler is None:
            return ""
        peek = getattr(handler, "peek", None)
        if peek is not None:
            return peek(node, parent, self, info)[:1]
        return handler(node, parent, self, info)[:1]

    def container_phrasing(self, parent: Parent, info: SafeInfo) -> str:
        """Serialize the phrasing children of ``parent``.

        Each child learns the character emitted before it (the last character
        of its previous sibling, or ``info.before``) and the character that will
        follow it (the next sibling's peek, or ``info.after``).
        """
        children = parent.children
        results: list[str] = []
        before = info.before
        tracker = Tracker.from_info(info)

        for index, child in enumerate(children):
            if index + 1 < len(children):
                after = self.peek(children[index + 1], parent, tracker.info())
            else:
                after = info.after

            result = self.handle(child, parent, tracker.info(before=before, after=after, encode=info.encode))
            tracker = tracker.move(result)
            results.append(result)
            before = result[-1:]

        return "".join(results)

    def container_flow(self, parent: Parent, info: SafeInfo) -> str:
        """Serialize block-level children separated by blank lines."""
        separator = self.options.join_blocks
        tracker = Tracker.from_info(info)
        results: list[str] = []

        for index, child in enumerate(parent.children):
            result = self.handle(child, parent, tracker.info(before="\n", after="\n"))
            tracker = tracker.move(result)
            results.append(result)
            if index + 1 < len(parent.children):
                tracker = tracker.move(separator)

        return separator.join(results)

    def safe(self, value: Optional[str], info: SafeInfo) -> str:
        """Escape characters of ``value`` that would be read as syntax.

        Parameters
        ----------
        value : str or None
            Literal text to emit
        info : SafeInfo
            Surrounding characters, used to evaluate ``before``/``after``
            context of unsafe patterns

        Returns
        -------
        str
            Escaped text

        """
        before = info.before
        after = info.after
        whole = before + (value or "") + after
        flags: dict[int, tuple[bool, bool]] = {}

        for pattern in self.unsafe:
            if not pattern.in_scope(self.stack):
                continue
            for match in pattern.expression.finditer(whole):
                position = match.start() + (len(match.group(1)) if pattern.has_before else 0)
                if position in flags:
                    has_before, has_after = flags[position]
                    flags[position] = (has_before and pattern.has_before, has_after and pattern.has_after)
                else:
                    flags[position] = (pattern.has_before, pattern.has_after)

        positions = sorted(flags)
        start = len(before)
        end = len(whole) - len(after)
        results: list[str] = []

        for index, position in enumerate(positions):
            if position < start or position >= end:
                continue

            # Only one of two adjacent characters needs escaping when the
            # pattern was about their combination.
            following = positions[index + 1] if index + 1 < len(positions) else None
            preceding = positions[index - 1] if index > 0 else None
            if (
                position + 1 < end
                and following == position + 1
                and flags[position][1]
                and not any(flags[following])
            ) or (preceding == position - 1 and flags[position][0] and not any(flags[preceding])):
                continue

            if start != position:
                results.append(escape_backslashes(whole[start:position], "\\"))

            start = position
            character = whole[position]
            if character in ASCII_PUNCTUATION and character not in info.encode:
                results.append("\\")
            else:
                results.append(f"&#x{ord(character):X};")
                start += 1

        results.append(escape_backslashes(whole[start:end], after))
        return "".join(results)


# ============================================================================
# Base handlers
# ============================================================================


def _root(node: Root, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    if node.children and all(is_phrasing(child) for child in node.children):
        exit_phrasing = state.enter("phrasing")
        value = state.container_phrasing(node, info)
        exit_phrasing()
        return value
    return state.container_flow(node, info)


def _paragraph(node: Paragraph, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    exit_paragraph = state.enter("paragraph")
    exit_phrasing = state.enter("phrasing")
    value = state.container_phrasing(node, info)
    exit_phrasing()
    exit_paragraph()
    return value


def _heading(node: Heading, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    rank = max(min(6, node.depth or 1), 1)
    sequence = "#" * rank
    tracker = Tracker.from_info(info).move(sequence + " ")

    exit_heading = state.enter("headingAtx")
    exit_phrasing = state.enter("phrasing")
    value = state.container_phrasing(node, tracker.info(before="# ", after="\n"))
    exit_phrasing()
    exit_heading()

    if value[:1] in (" ", "\t"):
        value = f"&#x{ord(value[0]):X};" + value[1:]
    return f"{sequence} {value}" if value else sequence


def _text(node: Text, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    return state.safe(node.value, info)


def _break(node: Break, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    return HARD_BREAK


def _inline_code_peek(*_: Any) -> str:
    return "`"


@peekable(_inline_code_peek)
def _inline_code(node: InlineCode, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    value = node.value or ""
    sequence = "`"
    while re.search(f"(^|[^`]){sequence}([^`]|$)", value):
        sequence += "`"

    if re.search(r"[^ \r\n]", value) and (
        (re.match(r"[ \r\n]", value) and re.search(r"[ \r\n]$", value)) or value.startswith("`") or value.endswith("`")
    ):
        value = f" {value} "

    return f"{sequence}{value}{sequence}"


def _emphasis_peek(node: Any, parent: Any, state: SerializerState, info: SafeInfo) -> str:
    return state.options.emphasis_marker


def _wrap_phrasing(construct: str, marker: str, node: Parent, state: SerializerState, info: SafeInfo) -> str:
    exit_construct = state.enter(construct)
    tracker = Tracker.from_info(info)
    value = marker
    tracker = tracker.move(marker)
    value += state.container_phrasing(node, tracker.info(before=value, after=marker))
    value += marker
    exit_construct()
    return value


@peekable(_emphasis_peek)
def _emphasis(node: Emphasis, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    return _wrap_phrasing("emphasis", state.options.emphasis_marker, node, state, info)


@peekable(_emphasis_peek)
def _strong(node: Strong, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    return _wrap_phrasing("strong", state.options.emphasis_marker * 2, node, state, info)


_URL_SCHEME = re.compile(r"^[a-z][a-z+.-]+:", re.IGNORECASE)
_NEEDS_LITERAL_DESTINATION = re.compile(r"[\x00- \x7f]")
_NOT_AUTOLINKABLE = re.compile(r"[\x00- <>\x7f]")


def _format_link_as_autolink(node: Link) -> bool:
    raw = extract_text(node)
    return bool(
        node.url
        and not node.title
        and len(node.children) == 1
        and node.children[0].type == "text"
        and (raw == node.url or "mailto:" + raw == node.url)
        and _URL_SCHEME.match(node.url)
        and not _NOT_AUTOLINKABLE.search(node.url)
    )


def _link_peek(node: Link, parent: Any, state: SerializerState, info: SafeInfo) -> str:
    return "<" if _format_link_as_autolink(node) else "["


@peekable(_link_peek)
def _link(node: Link, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    tracker = Tracker.from_info(info)

    if _format_link_as_autolink(node):
        # Autolinks are opaque: nothing in them is phrasing.
        saved_stack = state.stack
        state.stack = []
        exit_autolink = state.enter("autolink")
        value = "<"
        tracker = tracker.move(value)
        value += state.container_phrasing(node, tracker.info(before=value, after=">"))
        value += ">"
        exit_autolink()
        state.stack = saved_stack
        return value

    exit_link = state.enter("link")
    exit_label = state.enter("label")
    value = "["
    tracker = tracker.move(value)
    label = state.container_phrasing(node, tracker.info(before=value, after="]("))
    value += label + "]("
    tracker = tracker.move(label + "](")
    exit_label()

    if (not node.url and node.title) or _NEEDS_LITERAL_DESTINATION.search(node.url):
        exit_destination = state.enter("destinationLiteral")
        value += "<"
        tracker = tracker.move("<")
        destination = state.safe(node.url, tracker.info(before=value, after=">"))
        value += destination + ">"
        tracker = tracker.move(destination + ">")
    else:
        exit_destination = state.enter("destinationRaw")
        destination = state.safe(node.url, tracker.info(before=value, after=" " if node.title else ")"))
        value += destination
        tracker = tracker.move(destination)
    exit_destination()

    if node.title:
        exit_title = state.enter("titleQuote")
        value += ' "'
        tracker = tracker.move(' "')
        value += state.safe(node.title, tracker.info(before=value, after='"')) + '"'
        exit_title()

    value += ")"
    exit_link()
    return value


def _link_reference_peek(*_: Any) -> str:
    return "["


@peekable(_link_reference_peek)
def _link_reference(node: LinkReference, parent: Optional[Parent], state: SerializerState, info: SafeInfo) -> str:
    tracker = Tracker.from_info(info)
    exit_reference_node = state.enter("linkReference")
    exit_label = state.enter("label")
    value = "["
    tracker = tracker.move(value)
    text = state.container_phrasing(node, tracker.info(before=value, after="]"))
    value += text + "]["
    tracker = tracker.move(text + "][")
    exit_label()

    # The reference part is an identifier, not phrasing.
    saved_stack = state.stack
    state.stack = []
    exit_reference = state.enter("reference")
    reference = state.safe(node.label or node.identifier, tracker.info(before=value, after="]"))
    exit_reference()
    state.stack = saved_stack
    exit_reference_node()

    if node.reference_type == "full" or not text or text != reference:
        return value + reference + "]"
    if node.reference_type == "shortcut":
        return value[:-1]
    return value + "]"


BASE_HANDLERS: dict[str, Handle] = {
    "root": _root,
    "paragraph": _paragraph,
    "heading": _heading,
    "text": _text,
    "break": _break,
    "inlineCode": _inline_code,
    "emphasis": _emphasis,
    "strong": _strong,
    "link": _link,
    "linkReference": _link_reference,
}


class MarkdownRenderer:
    """Render AST nodes to markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Serializer options
    extensions : iterable of ToMarkdownExtension, default = ()
        Extensions merged in order: unsafe patterns accumulate, handlers of
        later extensions replace earlier ones for the same node type

    Examples
    --------
        >>> from mdattention import AttentionOptions, attention_to_markdown
        >>> from mdattention.ast import AttentionNode, Paragraph, Text
        >>> sub = AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
        >>> renderer = MarkdownRenderer(extensions=[attention_to_markdown(sub)])
        >>> renderer.render_to_string(Paragraph(children=[
        ...     Text(value="H"), AttentionNode(type="sub", children=[Text(value="2")]), Text(value="O"),
        ... ]))
        'H~2~O'

    """

    def __init__(
        self,
        options: MarkdownRendererOptions | None = None,
        extensions: Iterable[ToMarkdownExtension] = (),
    ):
        """Initialize the renderer with options and extensions."""
        if options is not None and not isinstance(options, MarkdownRendererOptions):
            raise InvalidOptionsError(
                converter_name="markdown", expected_type=MarkdownRendererOptions, received_type=type(options)
            )
        self.options: MarkdownRendererOptions = options or MarkdownRendererOptions()
        self.handlers: dict[str, Handle] = dict(BASE_HANDLERS)
        self.unsafe: list[UnsafePattern] = list(BASE_UNSAFE)
        for extension in extensions:
            self.unsafe.extend(extension.unsafe)
            self.handlers.update(extension.handlers)
            logger.debug("Registered serializer handlers for: %s", ", ".join(extension.handlers))

    def create_state(self) -> SerializerState:
        """Return a fresh state for one serialization run."""
        return SerializerState(self.handlers, self.unsafe, self.options)

    def render_to_string(self, node: Node) -> str:
        """Serialize ``node`` (usually a :class:`Root`) to markdown.

        Raises
        ------
        RenderingError
            If the tree contains a node type without a handler

        """
        state = self.create_state()
        return state.handle(node, None, SafeInfo(before="\n", after="\n"))
