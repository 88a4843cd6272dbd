"""
Module 05 - Merkle Proofs Convenience Wrappers
Thin wrappers around tree construction and proof functions for one-shot use.

This module provides class-based interfaces:
- MerkleProver: Build a tree and prove a value in one call
- MerkleVerifier: Verify proofs or raw leaf/sibling components

These are convenience wrappers around merkle_tree.py and proof.py.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

from vmt.crypto.hashing import DigestAlgorithm, get_algorithm, leaf_hash
from vmt.merkle.merkle_tree import build_tree
from vmt.merkle.proof import Proof, ProofLike, validate_proof


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(["a", "b", "c"], "b", "sha256")
        >>> proof.leaf == leaf_hash("b", get_algorithm("sha256"))
        True
    """

    @staticmethod
    def prove(
        values: Iterable[Any],
        value: Any,
        algorithm: Union[str, DigestAlgorithm],
        use_index: bool = False,
    ) -> Optional[Proof]:
        """
        Build a tree over values and prove one of them.

        Args:
            values: Leaf values
            value: The value to prove
            algorithm: Digest algorithm or registered name
            use_index: Use an indexed lookup instead of a linear scan

        Returns:
            Proof for value, or None if it is not among values
        """
        return build_tree(values, algorithm, use_index=use_index).build_proof(value)

    @staticmethod
    def compute_root(values: Iterable[Any], algorithm: Union[str, DigestAlgorithm]) -> bytes:
        """
        Compute the root for a sequence of leaf values.

        Returns:
            Root digest, or b"" for no values
        """
        return build_tree(values, algorithm).get_root()


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> root = MerkleProver.compute_root(["a", "b"], "sha256")
        >>> proof = MerkleProver.prove(["a", "b"], "a", "sha256")
        >>> MerkleVerifier.verify(proof, root, "sha256")
        True
    """

    @staticmethod
    def verify(
        proof: ProofLike,
        root: bytes,
        algorithm: Union[str, DigestAlgorithm],
    ) -> bool:
        """Verify a proof against a root."""
        return validate_proof(proof, root, algorithm)

    @staticmethod
    def verify_value_in_root(
        value: Any,
        siblings: Sequence[bytes],
        root: bytes,
        algorithm: Union[str, DigestAlgorithm],
    ) -> bool:
        """
        Verify a value is included in a root using raw components.

        The value is hashed to its leaf digest and prepended to the
        siblings to form the proof.

        Args:
            value: The leaf value (will be hashed)
            siblings: Sibling digests, bottom-up
            root: The claimed root
            algorithm: Digest algorithm or registered name

        Returns:
            True if the proof is valid, False otherwise
        """
        algo = get_algorithm(algorithm)
        proof = Proof.from_chunks([leaf_hash(value, algo), *siblings], algo.output_len)
        return validate_proof(proof, root, algo)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
