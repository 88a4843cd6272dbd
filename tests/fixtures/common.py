"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Leaf value lists of a given size
- Trees in either lookup mode
- Tampered copies of proofs
"""

from typing import Any, Sequence

from vmt.crypto.hashing import SHA512, DigestAlgorithm
from vmt.merkle.merkle_tree import MerkleTree, build_tree
from vmt.merkle.proof import Proof


# Matches the digest used by the reference test vectors
DEFAULT_ALGORITHM: DigestAlgorithm = SHA512

WORDS = ["one", "two", "three", "four", "five", "six", "seven", "eight"]


def make_values(count: int) -> list[str]:
    """First `count` leaf values, distinct, in a stable order."""
    if count > len(WORDS):
        return [f"leaf-{i}" for i in range(count)]
    return WORDS[:count]


def make_tree(
    values: Sequence[Any],
    indexed: bool = True,
    algorithm: DigestAlgorithm = DEFAULT_ALGORITHM,
) -> MerkleTree:
    """Build a tree in the requested lookup mode."""
    return build_tree(values, algorithm, use_index=indexed)


def tamper(proof: Proof, position: int, delta: int = 1) -> Proof:
    """Return a copy of proof with one byte changed."""
    data = bytearray(bytes(proof))
    data[position] = (data[position] + delta) % 256
    return Proof(data=bytes(data), output_len=proof.output_len)
