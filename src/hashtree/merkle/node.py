"""
Merkle Tree Nodes

Immutable binary tree node holding a digest and optional children.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, eq=False)
class MerkleNode:
    """
    Node of a Merkle tree.

    A node is a leaf when it has no left child. A node with a left child and
    no right child is a promoted singleton: the lone trailing node of an odd
    level, re-hashed on its way up.

    Nodes compare equal when their digests are equal.

    Attributes:
        digest: Hex digest of the node
        left: Left child, None for leaves
        right: Right child, None for leaves and promoted singletons
    """
    digest: str
    left: Optional["MerkleNode"] = None
    right: Optional["MerkleNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    @property
    def is_promoted(self) -> bool:
        return self.left is not None and self.right is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleNode):
            return NotImplemented
        return self.digest == other.digest

    def __hash__(self) -> int:
        return hash(self.digest)

    def __str__(self) -> str:
        return self.digest
