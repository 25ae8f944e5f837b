"""
Merkle Tree Operations

This package provides the binary hash tree, its nodes and its inclusion proofs.

The package is organized into three main components:
- node: Immutable tree node holding a digest and its children
- tree: Tree construction, index lookup, validation and diffing
- proof: Proof steps and proof verification
"""

from .node import MerkleNode
from .proof import MerkleProof, ProofStep
from .tree import MerkleTree

__all__ = [
    "MerkleNode",
    "MerkleProof",
    "ProofStep",
    "MerkleTree",
]
