"""
Hashed Sequence

Ordered container of items that caches each item's digest on insertion.
A MerkleTree built from a HashedSequence reads its items once, in order.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .exceptions import InvalidInputError
from .hashing import Hasher

logger = logging.getLogger(__name__)


class HashedSequence:
    """
    Insertion-ordered sequence of (item, digest) entries.

    Iteration yields items and is fail-fast: changing the sequence while an
    iterator is active raises RuntimeError on the iterator's next step.

    Args:
        items: Optional initial items, appended in order
        hasher: Digest function used for every entry (default Hasher())

    Examples:
        >>> seq = HashedSequence(["a", "b"])
        >>> seq.add_at_head("z")
        >>> list(seq)
        ['z', 'a', 'b']
    """

    def __init__(self, items: Optional[Iterable[Any]] = None, hasher: Optional[Hasher] = None):
        self.hasher = hasher or Hasher()
        self._entries: List[Tuple[Any, str]] = []
        self._modifications = 0
        if items is not None:
            for item in items:
                self.add_at_tail(item)

    def _entry(self, item: Any) -> Tuple[Any, str]:
        if item is None:
            raise InvalidInputError("A hashed sequence cannot hold None")
        return item, self.hasher.digest_data(item)

    def add_at_head(self, item: Any) -> None:
        """Insert an item before every other item."""
        self._entries.insert(0, self._entry(item))
        self._modifications += 1

    def add_at_tail(self, item: Any) -> None:
        """Insert an item after every other item."""
        self._entries.append(self._entry(item))
        self._modifications += 1

    append = add_at_tail

    def remove(self, item: Any) -> bool:
        """
        Remove the first entry whose item equals the argument.

        Returns:
            True if an entry was removed, False if no entry matched

        Raises:
            InvalidInputError: If item is None
        """
        if item is None:
            raise InvalidInputError("A hashed sequence cannot hold None")

        for position, (current, _) in enumerate(self._entries):
            if current == item:
                del self._entries[position]
                self._modifications += 1
                return True
        return False

    def hashes(self) -> List[str]:
        """Return every entry's digest in order."""
        return [digest for _, digest in self._entries]

    def describe(self) -> str:
        """Return one 'Item: ..., Digest: ...' line per entry."""
        return "".join(f"Item: {item}, Digest: {digest}\n" for item, digest in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        expected = self._modifications
        for position in range(len(self._entries)):
            if self._modifications != expected:
                raise RuntimeError("HashedSequence changed size during iteration")
            yield self._entries[position][0]
        if self._modifications != expected:
            raise RuntimeError("HashedSequence changed size during iteration")

    def __repr__(self) -> str:
        return f"HashedSequence(size={len(self._entries)}, algorithm={self.hasher.algorithm!r})"
