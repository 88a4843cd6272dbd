"""
Cryptographic utilities.

Digest algorithms plus the leaf and pair hashing used by the Merkle tree.
"""
from .hashing import (
    HashContext,
    DigestAlgorithm,
    SHA256,
    SHA384,
    SHA512,
    SHA3_256,
    SHA3_512,
    BLAKE2B,
    BLAKE2S,
    ALGORITHMS,
    get_algorithm,
    leaf_bytes,
    leaf_hash,
    pair_hash,
    to_hex,
    from_hex,
)

__all__ = [
    "HashContext",
    "DigestAlgorithm",
    "SHA256",
    "SHA384",
    "SHA512",
    "SHA3_256",
    "SHA3_512",
    "BLAKE2B",
    "BLAKE2S",
    "ALGORITHMS",
    "get_algorithm",
    "leaf_bytes",
    "leaf_hash",
    "pair_hash",
    "to_hex",
    "from_hex",
]
