"""Base classes for host and extension options.

This module defines the foundation classes for the immutable configuration
objects used throughout mdattention.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated (validation runs again)

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for options of hosts that build an AST (markdown, HTML).

    Notes
    -----
    Subclasses should define host-specific options as frozen dataclass fields.

    """


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for options of hosts that serialize an AST.

    Notes
    -----
    Subclasses should define host-specific options as frozen dataclass fields.

    """
