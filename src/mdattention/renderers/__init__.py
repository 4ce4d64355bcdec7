#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdattention/renderers/__init__.py
"""AST to markdown serialization.

Examples
--------
    >>> from mdattention.ast import Paragraph, Text
    >>> from mdattention.renderers import MarkdownRenderer
    >>> MarkdownRenderer().render_to_string(Paragraph(children=[Text(value="a*b")]))
    'a\\*b'

"""

from mdattention.renderers.markdown import (
    FULL_PHRASING_SPANS,
    MarkdownRenderer,
    SerializerState,
    ToMarkdownExtension,
)
from mdattention.renderers.tracking import SafeInfo, Tracker
from mdattention.renderers.unsafe import UnsafePattern

__all__ = [
    "FULL_PHRASING_SPANS",
    "MarkdownRenderer",
    "SafeInfo",
    "SerializerState",
    "ToMarkdownExtension",
    "Tracker",
    "UnsafePattern",
]
