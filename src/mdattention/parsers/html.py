#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/parsers/html.py
"""HTML to AST converter.

This module converts HTML, parsed with BeautifulSoup, into the same
mdast-shaped AST the markdown parser produces. Conversion is driven by a
table mapping tag names to handlers ``(state, element) -> node``; extensions
(such as the one returned by ``attention_from_html``) add entries to it.
Handlers use :meth:`HtmlToAstState.all` to convert an element's children and
:meth:`HtmlToAstState.patch` to copy the element's source position onto the
node they build.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from mdattention.ast.nodes import (
    Break,
    Emphasis,
    Heading,
    InlineCode,
    Link,
    Node,
    Paragraph,
    Point,
    Position,
    Root,
    Strong,
    Text,
    is_phrasing,
)
from mdattention.constants import DEPS_HTML, HTML_HEADING_TAGS, HTML_SKIPPED_TAGS
from mdattention.exceptions import InvalidOptionsError
from mdattention.options.html import HtmlOptions
from mdattention.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

HandlerResult = Union[Node, list[Node], None]
ElementHandler = Callable[["HtmlToAstState", Any], HandlerResult]

_WHITESPACE = re.compile(r"\s+")


class HtmlToAstState:
    """Conversion state handed to element handlers.

    Parameters
    ----------
    handlers : mapping
        Tag name to handler
    options : HtmlOptions
        Converter options

    """

    def __init__(self, handlers: Mapping[str, ElementHandler], options: HtmlOptions):
        self.handlers = dict(handlers)
        self.options = options

    def one(self, node: Any) -> HandlerResult:
        """Convert a single BeautifulSoup node.

        Unknown elements are transparent: their converted children are
        returned in their place.
        """
        from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

        if isinstance(node, (Comment, Doctype, Declaration, ProcessingInstruction)):
            return None

        if isinstance(node, NavigableString):
            text = str(node)
            if self.options.collapse_whitespace:
                text = _WHITESPACE.sub(" ", text)
            return Text(value=text) if text else None

        name = getattr(node, "name", None)
        if not isinstance(name, str) or name in HTML_SKIPPED_TAGS:
            return None

        handler = self.handlers.get(name)
        if handler is not None:
            return handler(self, node)

        return self.all(node)

    def all(self, element: Any) -> list[Node]:
        """Convert every child of ``element``, in document order.

        Whitespace-only text next to block-level siblings is formatting
        between blocks and is dropped; among phrasing siblings it is kept.
        """
        results: list[Node] = []
        for child in element.children:
            converted = self.one(child)
            if converted is None:
                continue
            if isinstance(converted, list):
                for node in converted:
                    _append_merging_text(results, node)
            else:
                _append_merging_text(results, converted)

        if all(is_phrasing(node) for node in results):
            return results
        return [node for node in results if not (isinstance(node, Text) and not node.value.strip())]

    def patch(self, origin: Any, node: Node) -> None:
        """Copy the source position of ``origin`` onto ``node``.

        BeautifulSoup records ``sourceline`` (1-indexed) and ``sourcepos``
        (0-indexed column) for tags when the builder supports it; nodes from
        other builders are left without a position.

        Only the start point is recorded. BeautifulSoup does not keep where
        an element's end tag is, so ``position.end`` stays None.
        """
        line = getattr(origin, "sourceline", None)
        column = getattr(origin, "sourcepos", None)
        if line is None or column is None:
            return
        node.position = Position(start=Point(line=line, column=column + 1))


def _append_merging_text(results: list[Node], node: Node) -> None:
    if isinstance(node, Text) and results and isinstance(results[-1], Text) and results[-1].position is None:
        results[-1].value += node.value
    else:
        results.append(node)


def _trim_edges(children: list[Node]) -> list[Node]:
    """Strip leading/trailing whitespace of a block's phrasing content."""
    if children and isinstance(children[0], Text):
        children[0].value = children[0].value.lstrip()
    if children and isinstance(children[-1], Text):
        children[-1].value = children[-1].value.rstrip()
    return [child for child in children if not (isinstance(child, Text) and not child.value)]


# ============================================================================
# Base handlers
# ============================================================================


def _paragraph(state: HtmlToAstState, element: Any) -> Node:
    result = Paragraph(children=_trim_edges(state.all(element)))
    state.patch(element, result)
    return result


def _heading(state: HtmlToAstState, element: Any) -> Node:
    result = Heading(depth=HTML_HEADING_TAGS[element.name], children=_trim_edges(state.all(element)))
    state.patch(element, result)
    return result


def _emphasis(state: HtmlToAstState, element: Any) -> Node:
    result = Emphasis(children=state.all(element))
    state.patch(element, result)
    return result


def _strong(state: HtmlToAstState, element: Any) -> Node:
    result = Strong(children=state.all(element))
    state.patch(element, result)
    return result


def _inline_code(state: HtmlToAstState, element: Any) -> Node:
    result = InlineCode(value=element.get_text())
    state.patch(element, result)
    return result


def _break(state: HtmlToAstState, element: Any) -> Node:
    result = Break()
    state.patch(element, result)
    return result


def _link(state: HtmlToAstState, element: Any) -> Node:
    href = element.get("href")
    title = element.get("title")
    result = Link(url=href or "", title=title or None, children=state.all(element))
    state.patch(element, result)
    return result


BASE_HANDLERS: dict[str, ElementHandler] = {
    "p": _paragraph,
    **{tag: _heading for tag in HTML_HEADING_TAGS},
    "em": _emphasis,
    "i": _emphasis,
    "strong": _strong,
    "b": _strong,
    "code": _inline_code,
    "br": _break,
    "a": _link,
}


class HtmlToAstConverter:
    """Convert HTML documents to AST representation.

    Parameters
    ----------
    options : HtmlOptions or None, default = None
        Converter options
    extensions : iterable of mapping, default = ()
        Tag name to handler tables merged over the base handlers, in order

    Examples
    --------
        >>> from mdattention import AttentionOptions, attention_from_html
        >>> sub = AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
        >>> doc = HtmlToAstConverter(extensions=[attention_from_html(sub)]).parse("<p>H<sub>2</sub>O</p>")

    """

    def __init__(
        self,
        options: HtmlOptions | None = None,
        extensions: Iterable[Mapping[str, ElementHandler]] = (),
    ):
        """Initialize the converter with options and extensions."""
        if options is not None and not isinstance(options, HtmlOptions):
            raise InvalidOptionsError(converter_name="html", expected_type=HtmlOptions, received_type=type(options))
        self.options: HtmlOptions = options or HtmlOptions()
        self.handlers: dict[str, ElementHandler] = dict(BASE_HANDLERS)
        for extension in extensions:
            self.handlers.update(extension)
            logger.debug("Registered HTML handlers for: %s", ", ".join(extension))

    def create_state(self) -> HtmlToAstState:
        """Return a fresh conversion state."""
        return HtmlToAstState(self.handlers, self.options)

    @requires_dependencies("html", DEPS_HTML)
    def parse(self, html_content: str) -> Root:
        """Parse an HTML string into an AST root.

        Parameters
        ----------
        html_content : str
            HTML source (fragment or full document)

        Returns
        -------
        Root
            AST root whose children are the converted top-level nodes

        """
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(html_content, self.options.parser)
        return self.convert(soup)

    def convert(self, element: Any) -> Root:
        """Convert the children of an already parsed element or soup."""
        state = self.create_state()
        return Root(children=state.all(element))

    def convert_element(self, element: Any) -> Optional[Node]:
        """Convert a single element with its registered handler.

        Returns None when the element has no handler of its own.
        """
        handler = self.handlers.get(getattr(element, "name", None) or "")
        if handler is None:
            return None
        result = handler(self.create_state(), element)
        if isinstance(result, list):
            return Root(children=result)
        return result


def html_to_ast(
    html_content: str,
    options: HtmlOptions | None = None,
    extensions: Iterable[Mapping[str, ElementHandler]] = (),
) -> Root:
    """Parse HTML into an AST root.

    Convenience wrapper around :class:`HtmlToAstConverter`.
    """
    return HtmlToAstConverter(options, extensions).parse(html_content)
