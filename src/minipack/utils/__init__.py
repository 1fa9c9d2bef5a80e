"""Utility functions for minipack.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import encoded_size, header_size, int_size

__all__ = [
    "encoded_size",
    "header_size",
    "int_size",
]
