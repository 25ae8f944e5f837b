"""
Hex Digest Utilities

This module provides helpers for handling the hex digests exchanged by the
proof models and shown by the command-line tool.
"""

from typing import Optional

from ..constants import DIGEST_PREVIEW_CHARS

HEX_CHARACTERS = frozenset("0123456789abcdefABCDEF")


def normalize_digest(digest: str, expected_bytes: Optional[int] = None) -> str:
    """
    Normalize a hex digest to lowercase without a '0x' prefix.

    The empty string is returned unchanged since it is a valid proof step.

    Args:
        digest: Hex digest, optionally '0x' prefixed
        expected_bytes: Optional expected byte length for validation

    Returns:
        Normalized hex digest

    Raises:
        ValueError: If the digest contains invalid characters, has an odd
            length or does not match expected_bytes

    Examples:
        >>> normalize_digest("0xABCD")
        "abcd"
        >>> normalize_digest("")
        ""
    """
    if digest.startswith("0x"):
        digest = digest[2:]

    if not all(c in HEX_CHARACTERS for c in digest):
        raise ValueError(f"Invalid hex digest: {digest}")
    if len(digest) % 2 == 1:
        raise ValueError(f"Hex digest has an odd number of characters: {digest}")

    if expected_bytes is not None and digest:
        actual_bytes = len(digest) // 2
        if actual_bytes != expected_bytes:
            raise ValueError(f"Expected {expected_bytes} bytes, got {actual_bytes} bytes")

    return digest.lower()


def shorten_digest(digest: str, chars: int = DIGEST_PREVIEW_CHARS) -> str:
    """
    Shorten a digest for display, keeping its first and last characters.

    Examples:
        >>> shorten_digest("5d41402abc4b2a76b9719d911017c592")
        "5d41402a...1017c592"
    """
    if not digest:
        return "(empty)"
    if len(digest) <= chars * 2 + 3:
        return digest
    return f"{digest[:chars]}...{digest[-chars:]}"
