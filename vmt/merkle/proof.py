"""
Module 05 - Merkle Proofs
Proof construction and verification.

A proof is a flat concatenation of fixed-length digests:

    leaf || sibling_0 || sibling_1 || ... || sibling_{height-2}

The leaf digest comes first, followed by one sibling per level from the
leaf level upwards. The root itself is never included. There is no header
or length field; the digest length is a property of the algorithm and must
be known to the verifier.

Verification folds the chunks left to right with the commutative pair hash,
so no left/right position information is needed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

from vmt.crypto.hashing import (
    DigestAlgorithm,
    from_hex,
    get_algorithm,
    leaf_hash,
    pair_hash,
    to_hex,
)
from vmt.merkle.index_math import next_level_len, padded_len, parent, sibling
from vmt.schemas.errors import ErrorCodes, InvalidProofException

if TYPE_CHECKING:
    from vmt.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Proof:
    """
    A Merkle inclusion proof for a single leaf.

    The proof owns its bytes; it is copied out of the tree when built and
    does not reference the tree afterwards.

    Attributes:
        data: Concatenated digests (leaf first, then siblings bottom-up)
        output_len: Length of each digest in bytes
    """
    data: bytes
    output_len: int

    def __post_init__(self) -> None:
        if self.output_len <= 0:
            raise ValueError(f"Digest output length must be positive, got {self.output_len}")
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    @property
    def chunk_count(self) -> int:
        return len(self.data) // self.output_len

    def is_well_formed(self) -> bool:
        """True if the proof holds at least two whole digests."""
        return _shape_error(self.data, self.output_len) is None

    def chunks(self) -> list[bytes]:
        """Split the proof into digests; a trailing partial chunk is dropped."""
        size = self.output_len
        return [self.data[i * size:(i + 1) * size] for i in range(self.chunk_count)]

    @property
    def leaf(self) -> bytes:
        return self.data[:self.output_len]

    @property
    def siblings(self) -> list[bytes]:
        return self.chunks()[1:]

    def to_hex(self) -> str:
        return to_hex(self.data)

    @classmethod
    def from_hex(cls, hex_string: str, output_len: int) -> "Proof":
        return cls(data=from_hex(hex_string), output_len=output_len)

    @classmethod
    def from_chunks(cls, chunks: list[bytes], output_len: int) -> "Proof":
        return cls(data=b"".join(bytes(c) for c in chunks), output_len=output_len)


ProofLike = Union[Proof, bytes, bytearray, memoryview]


def build_proof(tree: "MerkleTree", value: Any) -> Optional[Proof]:
    """
    Build an inclusion proof for a value.

    Algorithm:
    1. Hash the value and resolve its leaf position through the tree's lookup
    2. Seed the proof with the leaf digest
    3. At each level (padded to even length):
       - Append the digest at sibling(position)
       - Move to parent(position) in the next level
    4. Stop once the next level is the root

    Args:
        tree: Tree to prove against
        value: Leaf value (any value accepted by leaf_bytes())

    Returns:
        Proof, or None if no leaf has the value's digest
    """
    algorithm = tree.algorithm
    size = algorithm.output_len
    digest = leaf_hash(value, algorithm)

    position = tree.lookup.find(digest)
    if position is None:
        logger.debug(f"Leaf {digest.hex()[:16]}... not in tree, no proof built")
        return None

    array = tree.array
    data = bytearray(digest)

    level_start = 0
    level_len = tree.leafs_count()
    index = position
    while True:
        start = level_start + sibling(index) * size
        data += array[start:start + size]

        next_len = next_level_len(level_len)
        if next_len == 1:
            break
        level_start += padded_len(level_len) * size
        index = parent(index)
        level_len = next_len

    logger.debug(f"Built proof for leaf {position} with {len(data) // size} digests")
    return Proof(data=bytes(data), output_len=size)


def _shape_error(data: bytes, output_len: int) -> Optional[str]:
    if len(data) % output_len != 0:
        return f"Proof length {len(data)} is not a multiple of digest length {output_len}"
    if len(data) < 2 * output_len:
        return f"Proof must contain at least two digests, got {len(data) // output_len}"
    return None


def _proof_bytes(proof: ProofLike, algorithm: DigestAlgorithm) -> tuple[bytes, Optional[str]]:
    if isinstance(proof, Proof):
        if proof.output_len != algorithm.output_len:
            return proof.data, (
                f"Proof digest length {proof.output_len} does not match "
                f"{algorithm.name} ({algorithm.output_len})"
            )
        data = proof.data
    else:
        data = bytes(proof)
    return data, _shape_error(data, algorithm.output_len)


def _fold(data: bytes, algorithm: DigestAlgorithm) -> bytes:
    size = algorithm.output_len
    running = pair_hash(data[:size], data[size:2 * size], algorithm)
    for start in range(2 * size, len(data), size):
        running = pair_hash(running, data[start:start + size], algorithm)
    return running


def validate_proof(
    proof: ProofLike,
    root: bytes,
    algorithm: Union[str, DigestAlgorithm],
) -> bool:
    """
    Verify a proof against a root.

    Recomputes the root by folding the proof digests with pair_hash and
    compares the result byte-for-byte.

    Args:
        proof: Proof or raw concatenated digests
        root: Expected root digest
        algorithm: Digest algorithm (or registered name)

    Returns:
        True if the proof leads to root; False if it does not or is malformed
    """
    algo = get_algorithm(algorithm)
    data, error = _proof_bytes(proof, algo)
    if error is not None:
        logger.debug(f"Rejected malformed proof: {error}")
        return False
    return _fold(data, algo) == bytes(root)


def verify_proof_or_raise(
    proof: ProofLike,
    root: bytes,
    algorithm: Union[str, DigestAlgorithm],
) -> None:
    """
    Verify a proof, raising instead of returning False.

    Raises:
        InvalidProofException: MALFORMED_PROOF for bad shapes,
            ROOT_MISMATCH when the recomputed root differs
    """
    algo = get_algorithm(algorithm)
    data, error = _proof_bytes(proof, algo)
    if error is not None:
        raise InvalidProofException(
            error,
            code=ErrorCodes.MALFORMED_PROOF,
            proof_size=len(data),
            details={"output_len": algo.output_len},
        )

    computed = _fold(data, algo)
    if computed != bytes(root):
        raise InvalidProofException(
            "Recomputed root does not match expected root",
            code=ErrorCodes.ROOT_MISMATCH,
            proof_size=len(data),
            details={
                "expected_root": bytes(root).hex(),
                "computed_root": computed.hex(),
            },
        )


__all__ = [
    "Proof",
    "ProofLike",
    "build_proof",
    "validate_proof",
    "verify_proof_or_raise",
]
