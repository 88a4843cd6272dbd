"""
vmt - binary Merkle hash trees with compact inclusion proofs.

Usage:
    from vmt import MerkleTree, SHA512

    tree = MerkleTree.new(["one", "two", "three", "four"], SHA512)
    proof = tree.build_proof("three")
    assert tree.validate(proof)
"""

from vmt.crypto.hashing import (
    DigestAlgorithm,
    SHA256,
    SHA384,
    SHA512,
    SHA3_256,
    SHA3_512,
    BLAKE2B,
    BLAKE2S,
    get_algorithm,
    leaf_hash,
    pair_hash,
)
from vmt.merkle import (
    MerkleTree,
    Proof,
    build_tree,
    build_proof,
    validate_proof,
    verify_proof_or_raise,
    MerkleProver,
    MerkleVerifier,
)
from vmt.schemas.errors import (
    VmtException,
    InvalidProofException,
    UnknownAlgorithmException,
    LeafEncodingException,
)

__version__ = "0.1.0"

__all__ = [
    "DigestAlgorithm",
    "SHA256",
    "SHA384",
    "SHA512",
    "SHA3_256",
    "SHA3_512",
    "BLAKE2B",
    "BLAKE2S",
    "get_algorithm",
    "leaf_hash",
    "pair_hash",
    "MerkleTree",
    "Proof",
    "build_tree",
    "build_proof",
    "validate_proof",
    "verify_proof_or_raise",
    "MerkleProver",
    "MerkleVerifier",
    "VmtException",
    "InvalidProofException",
    "UnknownAlgorithmException",
    "LeafEncodingException",
]
