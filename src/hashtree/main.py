"""
Hash Tree - File based workflows

This module contains the functions used by the CLI to build trees from item
files, generate and verify inclusion proofs and diff two item files.

Item files are either JSON documents holding an array of items or text files
holding one item per non-blank line.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .config import get_settings
from .exceptions import InvalidInputError
from .hashing import Hasher
from .merkle import MerkleProof, MerkleTree
from .models import ProofModel
from .sequence import HashedSequence

logger = logging.getLogger(__name__)


@dataclass
class ProofResult:
    """Container for proof generation results."""
    proof: MerkleProof
    index: int
    metadata: Dict[str, Any]


@dataclass
class DiffResult:
    """Container for the comparison of two item files."""
    width: int
    equivalent: bool
    invalid_indices: Set[int] = field(default_factory=set)


def load_items(path: str, encoding: Optional[str] = None) -> List[Any]:
    """
    Load items from a JSON array file or a one-item-per-line text file.

    Files are decoded with the given encoding, or HASHTREE_ENCODING (utf-8).
    """
    encoding = encoding or get_settings().encoding
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Item file not found: {path}")

    if file_path.suffix.lower() == ".json":
        with open(file_path, "r", encoding=encoding) as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise InvalidInputError(f"{path} must contain a JSON array of items")
        items = data
    else:
        with open(file_path, "r", encoding=encoding) as f:
            items = [line.rstrip("\r\n") for line in f if line.strip()]

    logger.info(f"Loaded {len(items)} items from {path}")
    return items


def load_sequence(path: str, hasher: Optional[Hasher] = None) -> HashedSequence:
    """Load an item file into a HashedSequence."""
    hasher = hasher or Hasher()
    return HashedSequence(load_items(path, hasher.encoding), hasher=hasher)


def build_tree_from_file(path: str, algorithm: Optional[str] = None) -> MerkleTree:
    """Build a Merkle tree from an item file."""
    sequence = load_sequence(path, Hasher(algorithm))
    tree = MerkleTree(sequence)
    logger.info(f"Built tree from {path}: width={tree.width}, height={tree.height}")
    return tree


def generate_item_proof(path: str, item: Any, algorithm: Optional[str] = None) -> ProofResult:
    """Generate an inclusion proof for an item of an item file."""
    tree = build_tree_from_file(path, algorithm)
    proof = tree.proof_for_data(item)
    index = tree.index_of(item)

    metadata = {
        "item": item,
        "index": index,
        "width": tree.width,
        "height": tree.height,
        "algorithm": tree.hasher.algorithm,
        "item_digest": tree.hasher.digest_data(item),
        "proof_length": len(proof),
        "verified": proof.verify_data(item),
    }
    return ProofResult(proof, index, metadata)


def load_proof(proof_file: str) -> MerkleProof:
    """Read a proof JSON file written by the CLI."""
    with open(proof_file, "r", encoding="utf-8") as f:
        model = ProofModel.model_validate_json(f.read())
    return model.to_proof()


def save_proof(proof: MerkleProof, proof_file: str) -> None:
    """Write a proof JSON file."""
    with open(proof_file, "w", encoding="utf-8") as f:
        f.write(ProofModel.from_proof(proof).model_dump_json(indent=2))
    logger.info(f"Saved proof with {len(proof)} steps to {proof_file}")


def verify_item_proof(proof_file: str, item: Any) -> bool:
    """Verify an item against a proof JSON file."""
    proof = load_proof(proof_file)
    verified = proof.verify_data(item)
    logger.info(f"Verified item against {proof_file}: {verified}")
    return verified


def diff_item_files(path_a: str, path_b: str, algorithm: Optional[str] = None) -> DiffResult:
    """Compare two item files of the same length leaf by leaf."""
    tree_a = build_tree_from_file(path_a, algorithm)
    tree_b = build_tree_from_file(path_b, algorithm)

    if tree_a.width != tree_b.width:
        raise InvalidInputError(
            f"Item files have different lengths ({tree_a.width} vs {tree_b.width}) and cannot be diffed"
        )

    return DiffResult(
        width=tree_a.width,
        equivalent=tree_a.validate_tree(tree_b),
        invalid_indices=tree_a.find_invalid_indices(tree_b),
    )
