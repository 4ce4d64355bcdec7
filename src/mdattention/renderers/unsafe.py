#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/renderers/unsafe.py
"""Unsafe character patterns for markdown serialization.

An :class:`UnsafePattern` says: this character, in these surroundings, while
the serializer is inside (or outside) these constructs, would be read back as
syntax and must be escaped. The serializer checks every pattern whose
construct conditions hold against the text it is about to emit.

Construct names used by the base handlers:

``phrasing``, ``paragraph``, ``headingAtx``, ``emphasis``, ``strong``,
``link``, ``linkReference``, ``label``, ``autolink``, ``destinationLiteral``,
``destinationRaw``, ``reference``, ``titleQuote``, ``titleApostrophe``.
Extensions add their own (an attention extension enters its node name).

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Optional

from mdattention.constants import ConstructName

# Constructs that occur in phrasing but cannot contain phrasing spans such as
# emphasis or attention, so their markers need no escaping there.
FULL_PHRASING_SPANS: tuple[ConstructName, ...] = (
    "autolink",
    "destinationLiteral",
    "destinationRaw",
    "reference",
    "titleQuote",
    "titleApostrophe",
)

_BACKSLASH_BEFORE_PUNCTUATION = re.compile(r"\\(?=[!-/:-@\[-`{-~])")


@dataclass(frozen=True)
class UnsafePattern:
    """A character that needs escaping in some context.

    Parameters
    ----------
    character : str
        The single unsafe character
    in_construct : tuple of str, default ()
        The pattern applies only when one of these constructs is open.
        Empty means "anywhere".
    not_in_construct : tuple of str, default ()
        The pattern never applies while one of these constructs is open
    before : str or None, default None
        Regular expression that must match right before the character
    after : str or None, default None
        Regular expression that must match right after the character
    at_break : bool, default False
        Only unsafe at the start of a line (after optional indentation)

    """

    character: str
    in_construct: tuple[ConstructName, ...] = ()
    not_in_construct: tuple[ConstructName, ...] = ()
    before: Optional[str] = None
    after: Optional[str] = None
    at_break: bool = False

    def in_scope(self, stack: Iterable[ConstructName]) -> bool:
        """Return True if the pattern applies given the open constructs."""
        open_constructs = set(stack)
        if self.in_construct and open_constructs.isdisjoint(self.in_construct):
            return False
        return open_constructs.isdisjoint(self.not_in_construct)

    @property
    def has_before(self) -> bool:
        return self.before is not None or self.at_break

    @property
    def has_after(self) -> bool:
        return self.after is not None

    @cached_property
    def expression(self) -> re.Pattern[str]:
        """Compiled expression; group 1 (when present) is the leading context."""
        leading = ("[\\r\\n][\\t ]*" if self.at_break else "") + (f"(?:{self.before})" if self.before else "")
        source = (f"({leading})" if leading else "") + re.escape(self.character)
        if self.after:
            source += f"(?:{self.after})"
        return re.compile(source)


def escape_backslashes(value: str, after: str) -> str:
    """Double backslashes that would otherwise escape the next character.

    Parameters
    ----------
    value : str
        Text about to be emitted
    after : str
        Text that follows ``value`` in the output

    Returns
    -------
    str
        ``value`` with backslashes before ASCII punctuation escaped

    """
    whole = value + after
    results: list[str] = []
    start = 0
    for match in _BACKSLASH_BEFORE_PUNCTUATION.finditer(whole):
        position = match.start()
        if position >= len(value):
            break
        if start != position:
            results.append(value[start:position])
        results.append("\\")
        start = position
    results.append(value[start:])
    return "".join(results)


_PHRASING = ("phrasing",)

BASE_UNSAFE: tuple[UnsafePattern, ...] = (
    UnsafePattern(character="\t", after="[\\r\\n]", in_construct=_PHRASING),
    UnsafePattern(character="\t", before="[\\r\\n]", in_construct=_PHRASING),
    UnsafePattern(character="!", after="\\[", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character='"', in_construct=("titleQuote",)),
    UnsafePattern(character="#", at_break=True),
    UnsafePattern(character="#", in_construct=("headingAtx",), after="(?:[\\r\\n]|$)"),
    UnsafePattern(character="&", after="[#A-Za-z]", in_construct=_PHRASING),
    UnsafePattern(character="'", in_construct=("titleApostrophe",)),
    UnsafePattern(character="(", in_construct=("destinationRaw",)),
    UnsafePattern(character="(", before="\\]", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character=")", before="\\d+", at_break=True),
    UnsafePattern(character=")", in_construct=("destinationRaw",)),
    UnsafePattern(character="*", at_break=True, after="(?:[ \\t\\r\\n*])"),
    UnsafePattern(character="*", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character="+", at_break=True, after="(?:[ \\t\\r\\n])"),
    UnsafePattern(character="-", at_break=True, after="(?:[ \\t\\r\\n-])"),
    UnsafePattern(character=".", before="\\d+", at_break=True, after="(?:[ \\t\\r\\n]|$)"),
    UnsafePattern(character="<", at_break=True, after="[!/?A-Za-z]"),
    UnsafePattern(
        character="<", after="[!/?A-Za-z]", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS
    ),
    UnsafePattern(character="<", in_construct=("destinationLiteral",)),
    UnsafePattern(character="=", at_break=True),
    UnsafePattern(character=">", at_break=True),
    UnsafePattern(character=">", in_construct=("destinationLiteral",)),
    UnsafePattern(character="[", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character="[", in_construct=("label", "reference")),
    UnsafePattern(character="\\", after="[\\r\\n]", in_construct=_PHRASING),
    UnsafePattern(character="]", in_construct=("label", "reference")),
    UnsafePattern(character="_", at_break=True),
    UnsafePattern(character="_", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character="`", at_break=True),
    UnsafePattern(character="`", in_construct=_PHRASING, not_in_construct=FULL_PHRASING_SPANS),
    UnsafePattern(character="~", at_break=True),
)
