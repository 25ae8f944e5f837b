"""
Digest Functions

This module wraps hashlib into the digest function used by the hash tree.
Digests are lowercase hex strings; internal nodes are hashed from the ASCII
bytes of their children's concatenated hex digests.

Digest rules:
- bytes and bytearray items are hashed as-is
- str items are encoded with the configured encoding
- any other item is hashed through str(item)
"""

import codecs
import hashlib
import logging
from typing import Any, Optional

from .config import get_settings
from .constants import EMPTY_DIGEST, VARIABLE_LENGTH_ALGORITHMS
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class Hasher:
    """
    Fixed-width digest function over items and byte strings.

    Args:
        algorithm: hashlib algorithm name. Defaults to HASHTREE_ALGORITHM.
        encoding: Encoding for text items. Defaults to HASHTREE_ENCODING.

    Raises:
        InvalidInputError: If the algorithm is unknown or has no fixed output
            size, or the encoding is unknown

    Examples:
        >>> hasher = Hasher("sha256")
        >>> leaf = hasher.digest_data("alice")
        >>> parent = hasher.combine(leaf, hasher.digest_data("bob"))
    """

    def __init__(self, algorithm: Optional[str] = None, encoding: Optional[str] = None):
        settings = get_settings()
        algorithm = (algorithm or settings.algorithm).strip().lower()

        if algorithm in VARIABLE_LENGTH_ALGORITHMS:
            raise InvalidInputError(f"Digest algorithm {algorithm} has no fixed output size")
        try:
            hashlib.new(algorithm)
        except ValueError:
            raise InvalidInputError(f"Unsupported digest algorithm: {algorithm}")

        encoding = encoding or settings.encoding
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise InvalidInputError(f"Unsupported text encoding: {encoding}")

        self.algorithm = algorithm
        self.encoding = encoding

    @property
    def digest_size(self) -> int:
        """Size of a digest in bytes (hex digests are twice as long)."""
        return hashlib.new(self.algorithm).digest_size

    def digest_bytes(self, data: bytes) -> str:
        """Return the hex digest of raw bytes."""
        return hashlib.new(self.algorithm, bytes(data)).hexdigest()

    def digest_data(self, item: Any) -> str:
        """
        Return the hex digest of an item.

        Args:
            item: Item to hash (must not be None)

        Returns:
            Hex digest string

        Raises:
            InvalidInputError: If item is None
        """
        if item is None:
            raise InvalidInputError("Cannot compute the digest of None")

        if isinstance(item, (bytes, bytearray)):
            data = bytes(item)
        elif isinstance(item, str):
            data = item.encode(self.encoding)
        else:
            data = str(item).encode(self.encoding)
        return self.digest_bytes(data)

    def combine(self, left: str, right: str = EMPTY_DIGEST) -> str:
        """
        Hash the concatenation of two hex digests.

        With an empty right digest the left digest is re-hashed alone, which
        is how promoted singletons and empty proof steps are computed.
        """
        return self.digest_bytes((left + right).encode("ascii"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hasher):
            return NotImplemented
        return self.algorithm == other.algorithm and self.encoding == other.encoding

    def __hash__(self) -> int:
        return hash((self.algorithm, self.encoding))

    def __repr__(self) -> str:
        return f"Hasher(algorithm={self.algorithm!r}, encoding={self.encoding!r})"
