"""
Merkle Proof Construction and Verification

This module provides the inclusion proof produced by MerkleTree. A proof is
the ordered list of sibling digests from the target's level up to the root,
together with the root digest it folds up to. Proofs do not reference the
tree they were generated from and can be verified on their own.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple

from ..exceptions import InvalidInputError
from ..hashing import Hasher
from .node import MerkleNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProofStep:
    """
    One sibling digest of a Merkle proof.

    Attributes:
        digest: Sibling digest, or EMPTY_DIGEST when the level had no sibling
        is_left_sibling: True if the sibling is combined on the left
    """
    digest: str
    is_left_sibling: bool

    def __str__(self) -> str:
        return self.digest + ("L" if self.is_left_sibling else "R")


class MerkleProof:
    """
    Inclusion proof for an item or a branch of a Merkle tree.

    Steps are appended bottom-up while the proof is built and can never
    exceed max_length.

    Args:
        root_digest: Root digest of the tree the proof was generated from
        max_length: Maximum number of steps
        hasher: Digest function used by the tree (default Hasher())
        steps: Optional initial steps, appended in order

    Raises:
        InvalidInputError: If root_digest is None, max_length is negative or
            more than max_length initial steps are given

    Examples:
        >>> proof = tree.proof_for_data("alice")
        >>> proof.verify_data("alice")
        True
    """

    def __init__(
        self,
        root_digest: str,
        max_length: int,
        hasher: Optional[Hasher] = None,
        steps: Iterable[ProofStep] = (),
    ):
        if root_digest is None:
            raise InvalidInputError("The root digest of a proof cannot be None")
        if max_length < 0:
            raise InvalidInputError(f"Proof length cannot be negative: {max_length}")

        self._root_digest = root_digest
        self._max_length = max_length
        self._hasher = hasher or Hasher()
        self._steps = []

        for step in steps:
            if not self.append_step(step.digest, step.is_left_sibling):
                raise InvalidInputError(f"A proof cannot hold more than {max_length} steps")

    @property
    def root_digest(self) -> str:
        return self._root_digest

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def steps(self) -> Tuple[ProofStep, ...]:
        return tuple(self._steps)

    @property
    def is_full(self) -> bool:
        return len(self._steps) == self._max_length

    def append_step(self, digest: str, is_left_sibling: bool) -> bool:
        """
        Append a sibling digest to the proof.

        Args:
            digest: Sibling digest (EMPTY_DIGEST when the level has no sibling)
            is_left_sibling: True if the sibling is combined on the left

        Returns:
            True if the step was added, False if the proof is already full

        Raises:
            InvalidInputError: If digest is None
        """
        if digest is None:
            raise InvalidInputError("A proof step digest cannot be None")
        if self.is_full:
            return False
        self._steps.append(ProofStep(digest, is_left_sibling))
        return True

    def verify_data(self, item: Any) -> bool:
        """Check that an item folds up to the proof's root digest."""
        if item is None:
            raise InvalidInputError("Cannot verify None against a proof")
        return self.verify_digest(self._hasher.digest_data(item))

    def verify_branch(self, branch: MerkleNode) -> bool:
        """Check that a subtree root folds up to the proof's root digest."""
        if branch is None:
            raise InvalidInputError("Cannot verify a None branch against a proof")
        return self.verify_digest(branch.digest)

    def verify_digest(self, digest: str) -> bool:
        """
        Fold a starting digest over the proof steps and compare with the root.

        Each step combines sibling-then-current for left siblings and
        current-then-sibling otherwise. An empty step digest re-hashes the
        running value alone, mirroring singleton promotion in the tree.

        Args:
            digest: Digest of the item or branch being verified

        Returns:
            True if the folded value equals the root digest
        """
        if digest is None:
            raise InvalidInputError("Cannot verify a None digest against a proof")

        current = digest
        for step in self._steps:
            if step.is_left_sibling:
                current = self._hasher.combine(step.digest, current)
            else:
                current = self._hasher.combine(current, step.digest)

        verified = current == self._root_digest
        logger.debug(f"Proof with {len(self._steps)} steps verified={verified}")
        return verified

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(tuple(self._steps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleProof):
            return NotImplemented
        return (
            self._root_digest == other.root_digest
            and self._max_length == other.max_length
            and self._hasher == other.hasher
            and self.steps == other.steps
        )

    def __str__(self) -> str:
        return " ".join(str(step) for step in self._steps)

    def __repr__(self) -> str:
        return (
            f"MerkleProof(root_digest={self._root_digest!r}, "
            f"max_length={self._max_length}, steps={len(self._steps)})"
        )
