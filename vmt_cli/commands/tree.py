"""
CLI Tree Commands

Build a tree from a leaf file and print its root or a proof.

Usage:
    vmt root leaves.txt [--json]
    vmt prove leaves.txt VALUE [--json]

The leaf file holds one leaf per line (UTF-8); "-" reads from stdin.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from vmt.config.runtime import TreeConfig
from vmt.crypto.hashing import to_hex
from vmt.merkle.merkle_tree import MerkleTree, build_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 2


def read_values(source: str) -> list[str]:
    """
    Read leaf values, one per line, from a file path or "-" for stdin.

    Only LF (or CRLF) ends a line; other line-break characters such as form
    feeds stay inside the leaf. A single trailing newline is dropped.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Leaf file not found: {path}")
        text = path.read_bytes().decode("utf-8")
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def load_tree(args: Namespace) -> MerkleTree:
    """Build the tree described by the parsed arguments and config."""
    config: TreeConfig = args.tree_config
    values = read_values(args.leaves)
    logger.info(f"Building tree over {len(values)} leaves with {config.algorithm}")
    return build_tree(values, config.digest_algorithm(), use_index=config.use_index)


def tree_summary(tree: MerkleTree) -> dict:
    return {
        "root": to_hex(tree.get_root()),
        "algorithm": tree.algorithm.name,
        "leaves": tree.leafs_count(),
        "height": tree.height(),
        "nodes": tree.nodes_count(),
        "data_size": tree.data_size(),
    }


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    tree = load_tree(args)

    if args.json:
        print(json.dumps(tree_summary(tree), indent=2))
    else:
        print(to_hex(tree.get_root()))
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    tree = load_tree(args)
    proof = tree.build_proof(args.value)

    if proof is None:
        if args.json:
            print(json.dumps({"found": False, "value": args.value}, indent=2))
        else:
            print(f"Value not found in tree: {args.value!r}", file=sys.stderr)
        return EXIT_NOT_FOUND

    if args.json:
        print(json.dumps({
            "found": True,
            "value": args.value,
            "proof": proof.to_hex(),
            "digests": proof.chunk_count,
            "root": to_hex(tree.get_root()),
            "algorithm": tree.algorithm.name,
        }, indent=2))
    else:
        print(proof.to_hex())
    return EXIT_SUCCESS
