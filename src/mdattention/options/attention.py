#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/options/attention.py
"""Configuration shared by the three attention extensions.

One :class:`AttentionOptions` instance describes one attention syntax: the
AST node type it produces, the HTML tag it maps to, and the single character
that opens and closes it. The same instance is handed to
``attention_from_markdown``, ``attention_to_markdown`` and
``attention_from_html`` so the three directions agree on the node shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from mdattention.constants import OPTION_KEY_ALIASES
from mdattention.exceptions import InvalidConfigurationError
from mdattention.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class AttentionOptions(CloneFrozenMixin):
    """Configuration for one attention syntax.

    Parameters
    ----------
    source_node_name : str
        AST node type produced and consumed (e.g. "sub")
    target_tag_name : str
        HTML element tag that maps to the node (e.g. "sub")
    delimiter_char : str
        The single character used as both opening and closing marker

    Raises
    ------
    InvalidConfigurationError
        If a name is empty or not a string, or the delimiter is not exactly
        one non-whitespace character.

    Examples
    --------
        >>> AttentionOptions(source_node_name="sub", target_tag_name="sub", delimiter_char="~")
        AttentionOptions(source_node_name='sub', target_tag_name='sub', delimiter_char='~')

    """

    source_node_name: str = field(metadata={"help": "AST node type produced by the extensions"})
    target_tag_name: str = field(metadata={"help": "HTML tag name mapped to the node type"})
    delimiter_char: str = field(metadata={"help": "Single character opening and closing the span"})

    def __post_init__(self) -> None:
        """Validate the configuration before any extension is built."""
        for name in ("source_node_name", "target_tag_name"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidConfigurationError(name, value, f"{name} must be a non-empty string, got {value!r}")
            if value != value.strip():
                raise InvalidConfigurationError(name, value, f"{name} must not have surrounding whitespace")

        char = self.delimiter_char
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidConfigurationError(
                "delimiter_char", char, f"delimiter_char must be exactly one character, got {char!r}"
            )
        if char.isspace():
            raise InvalidConfigurationError("delimiter_char", char, "delimiter_char must not be whitespace")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> AttentionOptions:
        """Build options from a mapping.

        Accepts both the field names and the camel-case keys used by mdast
        tooling (``mdastNodeName``, ``hastNodeName``, ``char``).

        Parameters
        ----------
        values : Mapping
            Option values keyed by field name or alias

        Returns
        -------
        AttentionOptions
            Validated options

        Raises
        ------
        InvalidConfigurationError
            If a key is unknown or a required field is missing

        """
        known = {f.name for f in fields(cls)}
        resolved: dict[str, Any] = {}
        for key, value in values.items():
            name = OPTION_KEY_ALIASES.get(key, key)
            if name not in known:
                raise InvalidConfigurationError(key, value, f"Unknown attention option: {key!r}")
            resolved[name] = value

        missing = sorted(known - resolved.keys())
        if missing:
            raise InvalidConfigurationError(missing[0], None, f"Missing required attention option(s): {missing}")

        return cls(**resolved)

    @classmethod
    def coerce(cls, options: AttentionOptions | Mapping[str, Any]) -> AttentionOptions:
        """Return ``options`` as an :class:`AttentionOptions` instance."""
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise InvalidConfigurationError(
            "options", options, f"Expected AttentionOptions or a mapping, got {type(options).__name__}"
        )
