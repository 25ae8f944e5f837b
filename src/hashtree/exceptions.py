"""
Hash Tree Exceptions

Error kinds raised by the hash tree library.
"""


class HashTreeError(Exception):
    """Base exception for hash tree operations."""
    pass


class InvalidInputError(HashTreeError, ValueError):
    """
    Raised when an argument cannot be used by the operation it was passed to.

    This covers None arguments, empty input sequences, trees whose widths do
    not match, targets that are not part of the tree being queried and
    unsupported digest algorithms.
    """
    pass
