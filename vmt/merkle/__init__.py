"""
Merkle Tree and Proofs
Immutable binary Merkle tree with single-leaf inclusion proofs.

This module provides:
- MerkleTree / build_tree: tree construction over leaf values
- Proof: owned, flat concatenation of digests
- build_proof / validate_proof: proof generation and verification
- LeafLookup strategies: indexed map or linear scan
- Index arithmetic and tree shape helpers

Usage:
    from vmt.merkle import MerkleTree

    tree = MerkleTree.new_with_index(["one", "two", "three"], "sha512")
    proof = tree.build_proof("two")
    assert tree.validate(proof)
"""
from .index_math import (
    sibling,
    parent,
    padded_len,
    next_level_len,
    compute_tree_height,
    compute_nodes_count,
)

from .lookup import (
    LeafLookup,
    IndexedLookup,
    LinearScanLookup,
)

from .proof import (
    Proof,
    build_proof,
    validate_proof,
    verify_proof_or_raise,
)

from .merkle_tree import (
    MerkleTree,
    build_tree,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "Proof",
    # Core functions
    "build_tree",
    "build_proof",
    "validate_proof",
    "verify_proof_or_raise",
    # Lookup strategies
    "LeafLookup",
    "IndexedLookup",
    "LinearScanLookup",
    # Index arithmetic
    "sibling",
    "parent",
    "padded_len",
    "next_level_len",
    "compute_tree_height",
    "compute_nodes_count",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
