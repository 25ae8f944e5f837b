"""
Merkle Tree Construction and Queries

This module implements the binary hash tree built over an ordered sequence of
items, together with the traversal-based queries run against it: index
lookup, membership and branch validation, tree equivalence, invalid-index
diffing and inclusion proof generation.

Construction Rules:
- Leaves hold digest(item) in input order
- Each level is paired left to right; a pair hashes to combine(left, right)
- A trailing unpaired node is re-hashed alone, combine(left), at every level
  it is promoted through
- Height is ceil(log2(width)); a single item tree is one leaf of height 0
"""

import logging
from typing import Any, Iterable, List, Optional, Set, Tuple

from ..constants import EMPTY_DIGEST, NOT_FOUND
from ..exceptions import InvalidInputError
from ..hashing import Hasher
from ..sequence import HashedSequence
from .node import MerkleNode
from .proof import MerkleProof

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Immutable Merkle tree over an ordered, non-empty sequence of items.

    Args:
        items: Items in leaf order. A HashedSequence supplies its own hasher.
        hasher: Digest function. Defaults to the sequence's hasher or Hasher().

    Raises:
        InvalidInputError: If items is None, empty or contains None

    Examples:
        >>> tree = MerkleTree(["A", "B", "C"])
        >>> tree.width, tree.height
        (3, 2)
        >>> tree.index_of("C")
        2
    """

    def __init__(self, items: Iterable[Any], hasher: Optional[Hasher] = None):
        if items is None:
            raise InvalidInputError("Cannot build a Merkle tree from None")

        if hasher is None:
            hasher = items.hasher if isinstance(items, HashedSequence) else Hasher()
        self._hasher = hasher

        if isinstance(items, HashedSequence) and items.hasher == hasher:
            digests = items.hashes()
        else:
            digests = [hasher.digest_data(item) for item in items]

        level = [MerkleNode(digest) for digest in digests]
        if not level:
            raise InvalidInputError("Cannot build a Merkle tree from an empty sequence")
        self._width = len(level)

        while len(level) > 1:
            parents = []
            for i in range(0, len(level), 2):
                left = level[i]
                right = level[i + 1] if i + 1 < len(level) else None
                if right is not None:
                    digest = hasher.combine(left.digest, right.digest)
                else:
                    digest = hasher.combine(left.digest)
                parents.append(MerkleNode(digest, left, right))
            level = parents

        self._root = level[0]
        logger.debug(
            f"Built Merkle tree: width={self._width}, height={self.height}, "
            f"root={self._root.digest}"
        )

    @property
    def root(self) -> MerkleNode:
        return self._root

    @property
    def width(self) -> int:
        """Number of leaves, equal to the number of input items."""
        return self._width

    @property
    def height(self) -> int:
        """Number of levels above the leaves, ceil(log2(width))."""
        return (self._width - 1).bit_length()

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def __len__(self) -> int:
        return self._width

    def __repr__(self) -> str:
        return f"MerkleTree(width={self._width}, height={self.height}, root={self._root.digest!r})"

    # ====================
    # Index Lookup
    # ====================

    def index_of(self, item: Any, branch: Optional[MerkleNode] = None) -> int:
        """
        Find the leaf index of an item.

        Leaves are visited depth-first, left before right, counting every
        leaf passed over. With a branch the search is limited to that subtree
        and the result is the offset from its leftmost leaf.

        Args:
            item: Item to look up
            branch: Optional subtree root to search instead of the tree root

        Returns:
            0-based leaf index, or NOT_FOUND (-1) if no leaf matches

        Raises:
            InvalidInputError: If item is None or the branch is not part of
                the tree
        """
        if item is None:
            raise InvalidInputError("Cannot look up the index of None")
        if branch is not None and not self.contains_digest(branch.digest):
            raise InvalidInputError("The branch is not part of the tree")

        start = self._root if branch is None else branch
        index, _ = self._index_of(start, self._hasher.digest_data(item), 0)
        return index

    def _index_of(self, node: Optional[MerkleNode], digest: str, counter: int) -> Tuple[int, int]:
        # Returns (index or NOT_FOUND, leaves counted so far)
        if node is None:
            return NOT_FOUND, counter

        if node.is_leaf:
            if node.digest == digest:
                return counter, counter
            return NOT_FOUND, counter + 1

        found, counter = self._index_of(node.left, digest, counter)
        if found != NOT_FOUND:
            return found, counter
        return self._index_of(node.right, digest, counter)

    # ====================
    # Membership Validation
    # ====================

    def contains_digest(self, digest: str) -> bool:
        """
        Check whether any node of the tree carries the digest.

        Internal nodes are matched as well as leaves, so a subtree root is
        found the same way as a single item.
        """
        if digest is None:
            raise InvalidInputError("Cannot search the tree for a None digest")
        return self._contains_digest(self._root, digest)

    def _contains_digest(self, node: Optional[MerkleNode], digest: str) -> bool:
        if node is None:
            return False
        if node.digest == digest:
            return True
        if node.is_leaf:
            return False
        return self._contains_digest(node.left, digest) or self._contains_digest(node.right, digest)

    def validate_data(self, item: Any) -> bool:
        """Check whether the item's digest is present in the tree."""
        if item is None:
            raise InvalidInputError("None is never part of a Merkle tree")
        return self.contains_digest(self._hasher.digest_data(item))

    def validate_branch(self, branch: MerkleNode) -> bool:
        """Check whether the branch's root digest is present in the tree."""
        if branch is None:
            raise InvalidInputError("A None branch is never part of a Merkle tree")
        return self.contains_digest(branch.digest)

    def validate_tree(self, other: "MerkleTree") -> bool:
        """
        Check whether two trees hold the same data.

        Trees of equal width are equivalent when their root digests match;
        trees of different width never are.

        Raises:
            InvalidInputError: If other is None
        """
        if other is None:
            raise InvalidInputError("Cannot compare a Merkle tree with None")
        if self._width != other.width:
            return False
        return self._root.digest == other.root.digest

    # ====================
    # Diffing
    # ====================

    def find_invalid_indices(self, other: "MerkleTree") -> Set[int]:
        """
        Find the leaf indices whose data differs between two trees.

        Both trees are walked together; subtrees with equal digests are
        skipped whole, so only the paths leading to differing leaves are
        visited.

        Args:
            other: Tree of the same width

        Returns:
            Set of 0-based leaf indices that differ

        Raises:
            InvalidInputError: If other is None or has a different width

        Examples:
            >>> MerkleTree(["A", "B", "C"]).find_invalid_indices(MerkleTree(["A", "B", "X"]))
            {2}
        """
        if other is None or self._width != other.width:
            raise InvalidInputError("Trees with different structures cannot be diffed")

        if self._root.digest == other.root.digest:
            return set()

        invalid: Set[int] = set()
        self._collect_invalid(self._root, other.root, self._width, self.height, 0, invalid)
        logger.debug(f"Found {len(invalid)} invalid indices across {self._width} leaves")
        return invalid

    def _collect_invalid(
        self,
        mine: MerkleNode,
        theirs: MerkleNode,
        width: int,
        height: int,
        offset: int,
        invalid: Set[int],
    ) -> int:
        # Returns the offset of the first leaf after this subtree
        if mine.digest == theirs.digest:
            return offset + width

        if mine.is_leaf:
            invalid.add(offset)
            return offset + 1

        # The left child holds a full power-of-two share unless the subtree is smaller
        left_leaves = min(width, 2 ** (height - 1))
        right_leaves = width - left_leaves

        offset = self._collect_invalid(mine.left, theirs.left, left_leaves, height - 1, offset, invalid)
        if right_leaves > 0:
            offset = self._collect_invalid(mine.right, theirs.right, right_leaves, height - 1, offset, invalid)
        return offset

    # ====================
    # Proof Generation
    # ====================

    def proof_for_data(self, item: Any) -> MerkleProof:
        """
        Generate an inclusion proof for an item.

        Args:
            item: Item to prove

        Returns:
            MerkleProof with max_length equal to the tree height

        Raises:
            InvalidInputError: If item is None or not part of the tree
        """
        if item is None:
            raise InvalidInputError("Cannot generate a proof for None")

        path = self.path_to(self._hasher.digest_data(item))
        if not path:
            raise InvalidInputError("The item is not part of the tree")
        return self._proof_along(path, self.height)

    def proof_for_branch(self, branch: MerkleNode) -> MerkleProof:
        """
        Generate an inclusion proof for a subtree.

        The proof length is the depth at which the branch digest is found,
        that is the tree height minus the branch height.

        Args:
            branch: Root node of the subtree to prove

        Returns:
            MerkleProof folding the branch digest up to the root

        Raises:
            InvalidInputError: If branch is None or not part of the tree
        """
        if branch is None:
            raise InvalidInputError("Cannot generate a proof for a None branch")

        path = self.path_to(branch.digest)
        if not path:
            raise InvalidInputError("The branch is not part of the tree")
        return self._proof_along(path, len(path) - 1)

    def path_to(self, digest: str) -> List[MerkleNode]:
        """
        Return the nodes from the root down to the first node carrying a digest.

        The search matches internal nodes as well as leaves and looks in the
        left subtree first. An empty list means the digest is not in the tree.
        """
        if digest is None:
            raise InvalidInputError("Cannot search the tree for a None digest")
        return self._path_to(self._root, digest) or []

    def _path_to(self, node: Optional[MerkleNode], digest: str) -> Optional[List[MerkleNode]]:
        # Nodes from `node` down to the first match, left subtree searched first
        if node is None:
            return None
        if node.digest == digest:
            return [node]
        if node.is_leaf:
            return None

        for child in (node.left, node.right):
            path = self._path_to(child, digest)
            if path is not None:
                return [node] + path
        return None

    def _proof_along(self, path: List[MerkleNode], max_length: int) -> MerkleProof:
        proof = MerkleProof(self._root.digest, max_length, hasher=self._hasher)

        # Walk from the matched node back up to the root
        for depth in range(len(path) - 1, 0, -1):
            parent, child = path[depth - 1], path[depth]
            if child is parent.left:
                sibling = parent.right.digest if parent.right is not None else EMPTY_DIGEST
                proof.append_step(sibling, is_left_sibling=False)
            else:
                proof.append_step(parent.left.digest, is_left_sibling=True)

        logger.debug(f"Generated proof with {len(proof)} of {max_length} steps")
        return proof
