"""
Hash Tree Library

Binary hash trees ("Merkle trees") over ordered sequences of items.

Key features:
- Tree construction with re-hashed promotion of unpaired nodes
- Leaf index lookup, item and branch membership validation
- Tree equivalence checks and invalid-index diffing
- Inclusion proof generation and standalone proof verification
- Pluggable hashlib digest algorithms (md5 by default)

Modules:
- config: Environment driven settings
- constants: Shared constants
- hashing: Digest function
- sequence: Ordered, digest-caching item container
- merkle: Tree nodes, trees and proofs
- models: Pydantic models for proof and report JSON
- utils: Hex digest helpers
"""

from .constants import DEFAULT_ALGORITHM, EMPTY_DIGEST, NOT_FOUND
from .exceptions import HashTreeError, InvalidInputError
from .hashing import Hasher
from .sequence import HashedSequence
from .merkle import MerkleNode, MerkleProof, MerkleTree, ProofStep

__version__ = "0.1.0"

__all__ = [
    # Constants
    'DEFAULT_ALGORITHM',
    'EMPTY_DIGEST',
    'NOT_FOUND',

    # Errors
    'HashTreeError',
    'InvalidInputError',

    # Digest function and input sequence
    'Hasher',
    'HashedSequence',

    # Merkle structures
    'MerkleNode',
    'MerkleProof',
    'MerkleTree',
    'ProofStep',
]
