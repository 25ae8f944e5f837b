"""
Merkle Tree Visualization Module

This module renders Merkle trees and inclusion proofs with rich, helping users
understand the tree structure, promoted singletons and the path a proof
follows from a leaf up to the root.
"""

from typing import Any, Optional, Set

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .merkle import MerkleNode, MerkleProof, MerkleTree
from .utils import shorten_digest


def _node_label(node: MerkleNode, leaf_index: Optional[int], on_path: bool) -> str:
    digest = shorten_digest(node.digest)
    if node.is_leaf:
        label = f"🌱 leaf {leaf_index}: {digest}"
    elif node.is_promoted:
        label = f"⬆ promoted: {digest}"
    else:
        label = f"node: {digest}"
    return f"[bold green]{label}[/bold green]" if on_path else label


def _count_leaves(node: Optional[MerkleNode]) -> int:
    if node is None:
        return 0
    if node.is_leaf:
        return 1
    return _count_leaves(node.left) + _count_leaves(node.right)


def build_tree_view(tree: MerkleTree, highlight: Any = None, max_depth: Optional[int] = None) -> Tree:
    """
    Build a rich Tree showing the structure of a Merkle tree.

    Args:
        tree: Tree to render
        highlight: Optional item whose root-to-leaf path is highlighted
        max_depth: Optional number of levels to expand below the root

    Returns:
        rich.tree.Tree renderable
    """
    path_ids: Set[int] = set()
    if highlight is not None:
        path_ids = {id(node) for node in tree.path_to(tree.hasher.digest_data(highlight))}

    root_label = (
        f"🏁 root: {shorten_digest(tree.root.digest)} "
        f"(width {tree.width}, height {tree.height})"
    )
    if id(tree.root) in path_ids:
        root_label = f"[bold green]{root_label}[/bold green]"
    view = Tree(root_label)

    def add_children(parent_view: Tree, node: MerkleNode, depth: int, first_leaf: int) -> int:
        # Returns the index of the first leaf after this subtree
        if node.is_leaf:
            return first_leaf + 1
        if max_depth is not None and depth >= max_depth:
            parent_view.add(f"… {_count_leaves(node)} leaves")
            return first_leaf + _count_leaves(node)

        next_leaf = first_leaf
        for child in (node.left, node.right):
            if child is None:
                continue
            label = _node_label(child, next_leaf, id(child) in path_ids)
            child_view = parent_view.add(label)
            next_leaf = add_children(child_view, child, depth + 1, next_leaf)
        return next_leaf

    if tree.root.is_leaf:
        view.add(_node_label(tree.root, 0, id(tree.root) in path_ids))
    else:
        add_children(view, tree.root, 0, 0)
    return view


def build_proof_table(proof: MerkleProof, title: str = "Proof Steps") -> Table:
    """
    Build a rich Table listing the steps of a proof, bottom-up.

    Args:
        proof: Proof to render
        title: Table title

    Returns:
        rich.table.Table renderable
    """
    table = Table(title=title)
    table.add_column("Step", style="cyan", justify="right")
    table.add_column("Sibling Digest", style="green")
    table.add_column("Side", style="yellow")

    for i, step in enumerate(proof.steps):
        if not step.digest:
            side = "alone (re-hash)"
        elif step.is_left_sibling:
            side = "left"
        else:
            side = "right"
        table.add_row(str(i), step.digest or "(empty)", side)

    return table


def visualize_tree(tree: MerkleTree, highlight: Any = None, max_depth: Optional[int] = None,
                   console: Optional[Console] = None):
    """Print a tree, and the proof for the highlighted item if one is given."""
    console = console or Console()
    console.print("\n🌳 MERKLE TREE VISUALIZATION")
    console.print(build_tree_view(tree, highlight, max_depth))

    if highlight is not None and tree.validate_data(highlight):
        proof = tree.proof_for_data(highlight)
        console.print(build_proof_table(proof, title=f"Proof for {escape(repr(highlight))}"))
        console.print(f"✅ Proof verified: {proof.verify_data(highlight)}")
