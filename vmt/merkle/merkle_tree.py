"""
Module 06 - Merkle Tree Implementation
Immutable binary Merkle tree stored as one flat digest array.

This module provides:
- build_tree: single-pass tree construction
- MerkleTree: the built tree with proof building and validation

Storage Layout:
All levels are concatenated bottom-to-top into one bytes object,
leaf level first and root last. Each entry is algorithm.output_len bytes.

    [3 leaves a, b, c]
    level 0: a  b  c  c      (c duplicated)
    level 1: ab cc
    level 2: root

Construction Rules (Hard Contracts):
1. Leaf hashing: leaf = H(bytes_of(value)), in input order
2. Parent hashing: pair_hash(left, right) (commutative, see crypto.hashing)
3. Padding rule: duplicate the last node of an odd level; the copy is stored
   in the array but not counted in leafs_count()
4. Empty input: no digests, height 0, root b""
5. Single leaf: paired with its duplicate, height 2, three digests
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from vmt.crypto.hashing import DigestAlgorithm, get_algorithm, leaf_hash, pair_hash
from vmt.merkle.index_math import next_level_len, padded_len
from vmt.merkle.lookup import IndexedLookup, LeafLookup, LinearScanLookup
from vmt.merkle.proof import (
    Proof,
    ProofLike,
    build_proof,
    validate_proof,
    verify_proof_or_raise,
)

if TYPE_CHECKING:
    from vmt.config.runtime import TreeConfig


logger = logging.getLogger(__name__)


def _build_levels(array: bytearray, leaf_count: int, algorithm: DigestAlgorithm) -> int:
    """Append every level above the leaves to array; return the tree height."""
    if leaf_count == 0:
        return 0

    size = algorithm.output_len
    level_start = 0
    level_len = leaf_count
    height = 1

    while True:
        # Pad with duplicate of last node if odd
        if padded_len(level_len) != level_len:
            last = level_start + (level_len - 1) * size
            array += array[last:last + size]

        level_end = level_start + padded_len(level_len) * size
        for offset in range(level_start, level_end, 2 * size):
            left = bytes(array[offset:offset + size])
            right = bytes(array[offset + size:offset + 2 * size])
            array += pair_hash(left, right, algorithm)

        height += 1
        level_start = level_end
        level_len = next_level_len(level_len)
        if level_len == 1:
            return height


def build_tree(
    values: Iterable[Any],
    algorithm: Union[str, DigestAlgorithm],
    use_index: bool = False,
) -> "MerkleTree":
    """
    Build a Merkle tree from leaf values.

    Args:
        values: Leaf values in order; each must have a byte view
                (bytes, str, or an object implementing __bytes__)
        algorithm: Digest algorithm or registered name
        use_index: Build a digest -> position map during the leaf pass
                   instead of scanning leaves when proofs are requested

    Returns:
        Immutable MerkleTree

    Raises:
        UnknownAlgorithmException: If algorithm is an unknown name
        LeafEncodingException: If a value has no byte view
    """
    algo = get_algorithm(algorithm)
    array = bytearray()
    positions: Optional[dict[bytes, int]] = {} if use_index else None

    leaf_count = 0
    for position, value in enumerate(values):
        digest = leaf_hash(value, algo)
        array += digest
        if positions is not None:
            positions[digest] = position
        leaf_count += 1

    height = _build_levels(array, leaf_count, algo)
    data = bytes(array)

    lookup: LeafLookup
    if positions is not None:
        lookup = IndexedLookup(positions)
    else:
        lookup = LinearScanLookup(data, leaf_count, algo.output_len)

    logger.debug(
        f"Built tree: leaves={leaf_count} height={height} "
        f"nodes={len(data) // algo.output_len} algorithm={algo.name} indexed={use_index}"
    )
    return MerkleTree(data, height, leaf_count, algo, lookup)


class MerkleTree:
    """
    Immutable binary Merkle tree.

    Use MerkleTree.new() or MerkleTree.new_with_index() to construct.
    The two produce identical digests and proofs; the indexed variant
    trades memory for O(1) leaf lookups in build_proof().

    Example:
        >>> tree = MerkleTree.new(["one", "two", "three"], "sha256")
        >>> proof = tree.build_proof("two")
        >>> tree.validate(proof)
        True
        >>> tree.build_proof("four") is None
        True
    """

    __slots__ = ("_array", "_height", "_leaf_count", "_algorithm", "_lookup")

    def __init__(
        self,
        array: bytes,
        height: int,
        leaf_count: int,
        algorithm: DigestAlgorithm,
        lookup: LeafLookup,
    ) -> None:
        self._array = array
        self._height = height
        self._leaf_count = leaf_count
        self._algorithm = algorithm
        self._lookup = lookup

    @classmethod
    def new(cls, values: Iterable[Any], algorithm: Union[str, DigestAlgorithm]) -> "MerkleTree":
        """Build a tree that finds leaves by linear scan."""
        return build_tree(values, algorithm, use_index=False)

    @classmethod
    def new_with_index(
        cls, values: Iterable[Any], algorithm: Union[str, DigestAlgorithm]
    ) -> "MerkleTree":
        """Build a tree with a digest -> position index."""
        return build_tree(values, algorithm, use_index=True)

    @classmethod
    def from_config(
        cls, values: Iterable[Any], config: Optional["TreeConfig"] = None
    ) -> "MerkleTree":
        """Build a tree using the algorithm and lookup mode from a TreeConfig."""
        if config is None:
            from vmt.config.runtime import get_default_config
            config = get_default_config()
        return build_tree(values, config.digest_algorithm(), use_index=config.use_index)

    # -- proofs ---------------------------------------------------------------

    def build_proof(self, value: Any) -> Optional[Proof]:
        """Build an inclusion proof for value, or None if it is not a leaf."""
        return build_proof(self, value)

    def validate(self, proof: ProofLike) -> bool:
        """Check a proof against this tree's root."""
        return validate_proof(proof, self.get_root(), self._algorithm)

    def ensure_valid(self, proof: ProofLike) -> None:
        """
        Check a proof against this tree's root.

        Raises:
            InvalidProofException: If the proof is malformed or does not match
        """
        verify_proof_or_raise(proof, self.get_root(), self._algorithm)

    # -- accessors ------------------------------------------------------------

    def is_empty(self) -> bool:
        return self.nodes_count() == 0

    def get_root(self) -> bytes:
        if self.is_empty():
            return b""
        return self._array[-self._algorithm.output_len:]

    def nodes_count(self) -> int:
        return len(self._array) // self._algorithm.output_len

    def leafs_count(self) -> int:
        return self._leaf_count

    def data_size(self) -> int:
        return len(self._array)

    def height(self) -> int:
        return self._height

    @property
    def algorithm(self) -> DigestAlgorithm:
        return self._algorithm

    @property
    def output_len(self) -> int:
        return self._algorithm.output_len

    @property
    def is_indexed(self) -> bool:
        return self._lookup.is_indexed

    @property
    def lookup(self) -> LeafLookup:
        return self._lookup

    @property
    def array(self) -> bytes:
        """The flat digest array (leaf level first, root last)."""
        return self._array

    def __bytes__(self) -> bytes:
        return self._array

    def __repr__(self) -> str:
        return (
            f"MerkleTree(algorithm={self._algorithm.name!r}, leaves={self._leaf_count}, "
            f"height={self._height}, indexed={self.is_indexed})"
        )


__all__ = [
    "build_tree",
    "MerkleTree",
]
