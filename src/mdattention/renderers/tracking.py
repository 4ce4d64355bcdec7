#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/renderers/tracking.py
"""Position tracking for markdown serialization.

Handlers need to know where in the output they are (line, column) and which
characters surround the text they emit, so escaping can depend on context.
Both pieces of information travel in a :class:`SafeInfo`. A :class:`Tracker`
is an immutable cursor: ``move`` returns a new tracker instead of mutating,
so a handler can hand its current position to a recursive call without the
callee being able to disturb it.

Examples
--------
    >>> tracker = Tracker.from_info(SafeInfo())
    >>> tracker = tracker.move("~")
    >>> tracker.column
    2
    >>> tracker.move("a\\nbc").current()
    {'line': 2, 'column': 3, 'line_shift': 0}

"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

_LINE_ENDING = re.compile(r"\r?\n|\r")


@dataclass(frozen=True)
class SafeInfo:
    """Context passed to every serializer handler.

    Parameters
    ----------
    before : str, default ""
        Text emitted right before the value being serialized
    after : str, default ""
        Text that will be emitted right after the value
    line : int, default 1
        Current output line
    column : int, default 1
        Current output column
    line_shift : int, default 0
        Indentation added to every new line by enclosing containers
    encode : tuple of str, default ()
        Characters that must be written as character references rather than
        backslash escapes

    """

    before: str = ""
    after: str = ""
    line: int = 1
    column: int = 1
    line_shift: int = 0
    encode: tuple[str, ...] = ()


@dataclass(frozen=True)
class Tracker:
    """Immutable output cursor."""

    line: int = 1
    column: int = 1
    line_shift: int = 0

    @classmethod
    def from_info(cls, info: SafeInfo) -> Tracker:
        """Start tracking from the position recorded in ``info``."""
        return cls(line=info.line, column=info.column, line_shift=info.line_shift)

    def move(self, value: str) -> Tracker:
        """Return a tracker positioned after ``value`` has been emitted."""
        chunks = _LINE_ENDING.split(value)
        tail = chunks[-1]
        if len(chunks) == 1:
            return replace(self, column=self.column + len(tail))
        return replace(self, line=self.line + len(chunks) - 1, column=1 + len(tail) + self.line_shift)

    def shift(self, amount: int) -> Tracker:
        """Return a tracker whose new lines start ``amount`` columns further in."""
        return replace(self, line_shift=self.line_shift + amount)

    def current(self) -> dict[str, Any]:
        """Position fields, suitable for building a :class:`SafeInfo`."""
        return {"line": self.line, "column": self.column, "line_shift": self.line_shift}

    def info(self, **changes: Any) -> SafeInfo:
        """Build a :class:`SafeInfo` at this position."""
        return SafeInfo(**self.current(), **changes)
