#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/utils/__init__.py
"""Utility modules for the mdattention package."""

from mdattention.utils.decorators import requires_dependencies

__all__ = ["requires_dependencies"]
