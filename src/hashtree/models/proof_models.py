"""
Proof Models

This module defines Pydantic models for the JSON shapes written and read by
the command-line tool: inclusion proofs, tree summaries and diff reports.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator

from ..hashing import Hasher
from ..merkle import MerkleProof, MerkleTree, ProofStep
from ..utils import normalize_digest


class ProofStepModel(BaseModel):
    """
    Model for a single proof step.

    Attributes:
        digest: Sibling digest as hex string, empty when the level had no sibling
        is_left_sibling: Whether the sibling is combined on the left
    """
    digest: str = Field(..., description="Sibling digest as hex string (empty for a lone node)")
    is_left_sibling: bool = Field(..., description="Sibling is combined on the left")

    @field_validator('digest')
    @classmethod
    def validate_digest(cls, v):
        """Validate the digest is a hex string or empty."""
        return normalize_digest(v)


class ProofModel(BaseModel):
    """
    Model for a complete inclusion proof.

    Attributes:
        root_digest: Root digest of the tree the proof was generated from
        max_length: Maximum number of steps (tree height for item proofs)
        algorithm: hashlib algorithm used by the tree
        encoding: Encoding used for text items
        steps: Proof steps ordered from the target's level up to the root
    """
    root_digest: str = Field(..., description="Root digest as hex string")
    max_length: int = Field(..., ge=0, description="Maximum number of proof steps")
    algorithm: str = Field(..., description="Digest algorithm")
    encoding: str = Field(default="utf-8", description="Encoding for text items")
    steps: List[ProofStepModel] = Field(default_factory=list, description="Proof steps, bottom-up")

    @field_validator('root_digest')
    @classmethod
    def validate_root_digest(cls, v):
        """Validate the root digest is a non-empty hex string."""
        v = normalize_digest(v)
        if not v:
            raise ValueError("root_digest cannot be empty")
        return v

    @model_validator(mode='after')
    def validate_length(self):
        """Validate the step count and that digest sizes match the algorithm."""
        if len(self.steps) > self.max_length:
            raise ValueError(
                f"Proof holds {len(self.steps)} steps but allows only {self.max_length}"
            )

        digest_size = Hasher(self.algorithm, self.encoding).digest_size
        normalize_digest(self.root_digest, expected_bytes=digest_size)
        for step in self.steps:
            normalize_digest(step.digest, expected_bytes=digest_size)
        return self

    @classmethod
    def from_proof(cls, proof: MerkleProof) -> "ProofModel":
        """Build the model from a MerkleProof."""
        return cls(
            root_digest=proof.root_digest,
            max_length=proof.max_length,
            algorithm=proof.hasher.algorithm,
            encoding=proof.hasher.encoding,
            steps=[
                ProofStepModel(digest=step.digest, is_left_sibling=step.is_left_sibling)
                for step in proof.steps
            ],
        )

    def to_proof(self) -> MerkleProof:
        """Rebuild a verifiable MerkleProof from the model."""
        return MerkleProof(
            self.root_digest,
            self.max_length,
            hasher=Hasher(self.algorithm, self.encoding),
            steps=[ProofStep(step.digest, step.is_left_sibling) for step in self.steps],
        )


class TreeSummaryModel(BaseModel):
    """
    Model summarizing a built tree.

    Attributes:
        width: Number of leaves
        height: Number of levels above the leaves
        root_digest: Root digest as hex string
        algorithm: Digest algorithm
    """
    width: int = Field(..., ge=1, description="Number of leaves")
    height: int = Field(..., ge=0, description="Tree height")
    root_digest: str = Field(..., description="Root digest as hex string")
    algorithm: str = Field(..., description="Digest algorithm")

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "TreeSummaryModel":
        return cls(
            width=tree.width,
            height=tree.height,
            root_digest=tree.root.digest,
            algorithm=tree.hasher.algorithm,
        )


class DiffReportModel(BaseModel):
    """
    Model for the comparison of two trees of equal width.

    Attributes:
        width: Number of leaves in each tree
        equivalent: Whether the root digests match
        invalid_indices: Sorted leaf indices whose data differs
    """
    width: int = Field(..., ge=1, description="Number of leaves in each tree")
    equivalent: bool = Field(..., description="Trees hold the same data")
    invalid_indices: List[int] = Field(default_factory=list, description="Differing leaf indices")

    @field_validator('invalid_indices')
    @classmethod
    def validate_indices(cls, v):
        """Keep indices sorted and unique."""
        if any(index < 0 for index in v):
            raise ValueError("Leaf indices cannot be negative")
        return sorted(set(v))
