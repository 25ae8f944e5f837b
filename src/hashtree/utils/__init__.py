"""
Hash Tree Utility Functions

This package provides utility functions for hex digest handling used by the
proof models and the command-line tool.
"""

from .hex_helpers import (
    normalize_digest,
    shorten_digest,
)

__all__ = [
    'normalize_digest',
    'shorten_digest',
]
