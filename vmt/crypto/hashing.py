"""
Module 02 - Hashing Utilities
Leaf hashing and canonical pair hashing for Merkle trees.

This module provides:
- DigestAlgorithm: the pluggable fixed-output-length digest primitive
- Leaf byte views for caller-supplied values
- Leaf hashing and commutative pair hashing
- Hex encoding/decoding with 0x prefix

Hashing Rules (Hard Contracts):
1. Leaf hashing: leaf = H(bytes_of(value))
2. Pair hashing: parent = H(min(a, b) || max(a, b))
   - min/max are lexicographic byte comparisons
   - pair_hash(a, b) == pair_hash(b, a) always
3. Digests are compared byte-for-byte, never by hex string

Determinism Notes:
- No randomness; the same algorithm and input always produce the same digest
- Both children are fed through one streaming context (update, update, digest)
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from vmt.schemas.errors import LeafEncodingException, UnknownAlgorithmException


class HashContext(Protocol):
    """Streaming digest context: update() any number of times, then digest()."""

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


@dataclass(frozen=True)
class DigestAlgorithm:
    """
    A fixed-output-length digest algorithm.

    Attributes:
        name: Registry name of the algorithm (e.g. "sha256")
        output_len: Digest length in bytes
        factory: Zero-argument callable returning a fresh HashContext
    """
    name: str
    output_len: int
    factory: Callable[[], HashContext]

    def __post_init__(self) -> None:
        if self.output_len <= 0:
            raise ValueError(f"Digest output length must be positive, got {self.output_len}")

    @classmethod
    def from_hashlib(cls, name: str) -> "DigestAlgorithm":
        """
        Wrap a hashlib constructor.

        Args:
            name: Any name accepted by hashlib.new() with a fixed digest size

        Returns:
            DigestAlgorithm backed by hashlib

        Raises:
            UnknownAlgorithmException: If hashlib does not know the name
        """
        try:
            sample = hashlib.new(name)
        except (ValueError, TypeError) as e:
            raise UnknownAlgorithmException(
                f"Unsupported digest algorithm: {name}", algorithm=name
            ) from e
        if name.startswith("shake_"):
            raise UnknownAlgorithmException(
                f"Variable-length digest not supported: {name}", algorithm=name
            )
        return cls(
            name=name,
            output_len=sample.digest_size,
            factory=lambda: hashlib.new(name),
        )

    def new(self) -> HashContext:
        """Return a fresh streaming context."""
        return self.factory()

    def __repr__(self) -> str:
        return f"DigestAlgorithm(name={self.name!r}, output_len={self.output_len})"


SHA256 = DigestAlgorithm.from_hashlib("sha256")
SHA384 = DigestAlgorithm.from_hashlib("sha384")
SHA512 = DigestAlgorithm.from_hashlib("sha512")
SHA3_256 = DigestAlgorithm.from_hashlib("sha3_256")
SHA3_512 = DigestAlgorithm.from_hashlib("sha3_512")
BLAKE2B = DigestAlgorithm.from_hashlib("blake2b")
BLAKE2S = DigestAlgorithm.from_hashlib("blake2s")

ALGORITHMS: dict[str, DigestAlgorithm] = {
    algo.name: algo
    for algo in (SHA256, SHA384, SHA512, SHA3_256, SHA3_512, BLAKE2B, BLAKE2S)
}


def get_algorithm(algorithm: str | DigestAlgorithm) -> DigestAlgorithm:
    """
    Resolve an algorithm name (or pass through an algorithm instance).

    Names are matched case-insensitively and "-" is accepted for "_",
    so "SHA-256", "sha256" and "Sha3-256" all resolve.

    Raises:
        UnknownAlgorithmException: If the name is not registered
    """
    if isinstance(algorithm, DigestAlgorithm):
        return algorithm

    key = algorithm.strip().lower().replace("-", "_")
    if key.startswith("sha_"):
        key = "sha" + key[4:]
    try:
        return ALGORITHMS[key]
    except KeyError:
        raise UnknownAlgorithmException(
            f"Unknown digest algorithm: {algorithm!r} "
            f"(known: {', '.join(sorted(ALGORITHMS))})",
            algorithm=algorithm,
        ) from None


def leaf_bytes(value: Any) -> bytes:
    """
    Return the byte view of a leaf value.

    bytes-like values are used as-is, str is UTF-8 encoded, and any
    other object must implement __bytes__.

    Raises:
        LeafEncodingException: If the value has no byte view
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if hasattr(value, "__bytes__"):
        return bytes(value)
    raise LeafEncodingException(
        f"Leaf value of type {type(value).__name__} has no byte view",
        value_type=type(value).__name__,
    )


def leaf_hash(data: Any, algorithm: DigestAlgorithm) -> bytes:
    """
    Compute the leaf digest of a value.

    Args:
        data: Raw bytes or any value accepted by leaf_bytes()
        algorithm: Digest algorithm

    Returns:
        Digest of algorithm.output_len bytes

    Example:
        >>> leaf_hash(b"hello", SHA256).hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    ctx = algorithm.new()
    ctx.update(leaf_bytes(data))
    return ctx.digest()


def pair_hash(a: bytes, b: bytes, algorithm: DigestAlgorithm) -> bytes:
    """
    Compute the parent digest of two child digests.

    The children are put in canonical (ascending) order before hashing,
    which makes the operation commutative.

    Args:
        a: First child digest
        b: Second child digest
        algorithm: Digest algorithm

    Returns:
        H(min(a, b) || max(a, b))
    """
    if a > b:
        a, b = b, a
    ctx = algorithm.new()
    ctx.update(a)
    ctx.update(b)
    return ctx.digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
