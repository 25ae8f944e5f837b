#!/usr/bin/env python3
"""
Hash Tree CLI

Command-line interface for building Merkle trees over item files, generating
and verifying inclusion proofs and diffing two item files.
"""

import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import get_settings
from .constants import DEFAULT_INSPECT_LIMIT, NOT_FOUND
from .main import (
    build_tree_from_file,
    diff_item_files,
    generate_item_proof,
    load_sequence,
    save_proof,
    verify_item_proof,
)
from .hashing import Hasher
from .merkle import MerkleTree
from .models import DiffReportModel, ProofModel, TreeSummaryModel
from .utils import shorten_digest
from .visualize import build_proof_table, visualize_tree

# Configure rich console
console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def print_proof_result(result, format_output: str = "table"):
    """Print proof results in various formats."""
    if format_output == "json":
        click.echo(ProofModel.from_proof(result.proof).model_dump_json(indent=2))
        return

    # Table format (default)
    table = Table(title="Inclusion Proof Results")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Root Digest", result.proof.root_digest)
    table.add_row("Proof Steps", f"{len(result.proof)} / {result.proof.max_length}")

    for key, value in result.metadata.items():
        table.add_row(key.replace("_", " ").title(), escape(str(value)))

    console.print(table)

    if format_output == "detailed":
        console.print(build_proof_table(result.proof))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--algorithm",
    "-a",
    envvar="HASHTREE_ALGORITHM",
    help="hashlib digest algorithm (defaults to md5)",
)
@click.pass_context
def cli(ctx, verbose: bool, algorithm: Optional[str]):
    """
    Hash Tree CLI - Build Merkle trees and inclusion proofs over item files.

    Item files are JSON arrays (*.json) or text files with one item per line.
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["algorithm"] = algorithm


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--limit", "-n", default=DEFAULT_INSPECT_LIMIT, type=int, help="Number of leaves to list")
@click.option(
    "--format",
    "format_output",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def inspect(ctx, items_file: str, limit: int, format_output: str):
    """Inspect the Merkle tree built from ITEMS_FILE."""
    try:
        sequence = load_sequence(items_file, Hasher(ctx.obj["algorithm"]))
        tree = MerkleTree(sequence)
        summary = TreeSummaryModel.from_tree(tree)

        if format_output == "json":
            click.echo(summary.model_dump_json(indent=2))
            return

        table = Table(title="Merkle Tree Information")
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Items File", escape(items_file))
        table.add_row("Algorithm", summary.algorithm)
        table.add_row("Width", str(summary.width))
        table.add_row("Height", str(summary.height))
        table.add_row("Root Digest", summary.root_digest)
        console.print(table)

        if limit > 0:
            console.print(f"\n[bold cyan]First {min(limit, len(sequence))} Leaves:[/bold cyan]")
            leaf_table = Table()
            leaf_table.add_column("Index", style="cyan")
            leaf_table.add_column("Item", style="green")
            leaf_table.add_column("Digest", style="yellow")

            for index, (item, digest) in enumerate(zip(sequence, sequence.hashes())):
                if index >= limit:
                    break
                leaf_table.add_row(str(index), escape(str(item)), shorten_digest(digest))

            console.print(leaf_table)

    except Exception as e:
        logger.error(f"Error inspecting {items_file}: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("item")
@click.pass_context
def index(ctx, items_file: str, item: str):
    """Print the leaf index of ITEM in ITEMS_FILE."""
    try:
        tree = build_tree_from_file(items_file, ctx.obj["algorithm"])
        position = tree.index_of(item)
    except Exception as e:
        logger.error(f"Error looking up {item}: {e}")
        raise click.ClickException(str(e))

    if position == NOT_FOUND:
        console.print(f"[yellow]{escape(item)} is not part of the tree[/yellow]")
        sys.exit(1)
    click.echo(position)


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("item")
@click.pass_context
def validate(ctx, items_file: str, item: str):
    """Check whether ITEM is part of the tree built from ITEMS_FILE."""
    try:
        tree = build_tree_from_file(items_file, ctx.obj["algorithm"])
        valid = tree.validate_data(item)
    except Exception as e:
        logger.error(f"Error validating {item}: {e}")
        raise click.ClickException(str(e))

    if valid:
        console.print(f"[green]✅ Valid: {escape(item)} is part of the tree[/green]")
    else:
        console.print(f"[red]❌ Invalid: {escape(item)} is not part of the tree[/red]")
        sys.exit(1)


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("item")
@click.option(
    "--format",
    "format_output",
    type=click.Choice(["table", "json", "detailed"]),
    default="table",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the proof JSON to a file")
@click.pass_context
def proof(ctx, items_file: str, item: str, format_output: str, output: Optional[str]):
    """
    Generate an inclusion proof for ITEM.

    ITEMS_FILE: JSON array or line-based text file of items

    ITEM: Item to prove, as it appears in the file
    """
    try:
        result = generate_item_proof(items_file, item, ctx.obj["algorithm"])

        if output:
            save_proof(result.proof, output)
            if format_output != "json":
                console.print(f"[green]Proof written to {escape(output)}[/green]")

        print_proof_result(result, format_output)

    except Exception as e:
        logger.error(f"Error generating proof: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument("proof_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("item")
def verify(proof_file: str, item: str):
    """Verify ITEM against a proof JSON file written by the proof command."""
    try:
        verified = verify_item_proof(proof_file, item)
    except Exception as e:
        logger.error(f"Error verifying proof: {e}")
        raise click.ClickException(str(e))

    if verified:
        console.print(f"[green]✅ Verified: {escape(item)} belongs to the proof's root[/green]")
    else:
        console.print(f"[red]❌ Not verified: {escape(item)} does not match the proof[/red]")
        sys.exit(1)


@cli.command()
@click.argument("first_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("second_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "format_output",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def diff(ctx, first_file: str, second_file: str, format_output: str):
    """List the leaf indices whose items differ between two files of equal length."""
    try:
        result = diff_item_files(first_file, second_file, ctx.obj["algorithm"])
        report = DiffReportModel(
            width=result.width,
            equivalent=result.equivalent,
            invalid_indices=list(result.invalid_indices),
        )

        if format_output == "json":
            click.echo(report.model_dump_json(indent=2))
            return

        table = Table(title="Merkle Tree Comparison")
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Width", str(report.width))
        table.add_row("Equivalent", "✅ Yes" if report.equivalent else "❌ No")
        table.add_row("Differing Leaves", str(len(report.invalid_indices)))
        table.add_row("Indices", ", ".join(str(i) for i in report.invalid_indices) or "-")
        console.print(table)

    except Exception as e:
        logger.error(f"Error comparing {first_file} and {second_file}: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--item", "-i", help="Item whose proof path is highlighted")
@click.option("--max-depth", "-d", type=int, help="Number of levels to expand")
@click.pass_context
def visualize(ctx, items_file: str, item: Optional[str], max_depth: Optional[int]):
    """Visualize the Merkle tree built from ITEMS_FILE."""
    try:
        tree = build_tree_from_file(items_file, ctx.obj["algorithm"])
        visualize_tree(tree, highlight=item, max_depth=max_depth, console=console)

    except Exception as e:
        console.print(f"[red]Visualization error: {escape(str(e))}[/red]", style="bold")
        if ctx.obj.get("verbose"):
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    cli()
