"""
Module 04 - Leaf Lookup
Strategies that resolve a leaf digest to its position in the leaf level.

This module provides:
- LeafLookup: the lookup contract used by proof construction
- IndexedLookup: digest -> position map filled during the leaf pass
- LinearScanLookup: scan over the leaf level of the flat tree array

Duplicate leaves:
Both strategies resolve a repeated digest to its LAST position, so trees
built in either mode produce identical proofs.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class LeafLookup(ABC):
    """Resolve a leaf digest to its position in the leaf level."""

    @property
    @abstractmethod
    def is_indexed(self) -> bool:
        """Whether lookups are backed by a hash map."""

    @abstractmethod
    def find(self, digest: bytes) -> Optional[int]:
        """
        Find the leaf position of a digest.

        Args:
            digest: Leaf digest to look for

        Returns:
            0-based leaf position, or None if no leaf has this digest
        """


class IndexedLookup(LeafLookup):
    """
    Hash-map lookup, O(1) average.

    The position map is copied on construction and read-only afterwards.

    Args:
        positions: digest -> 0-based leaf position
    """

    def __init__(self, positions: Optional[Mapping[bytes, int]] = None) -> None:
        self._positions: Mapping[bytes, int] = MappingProxyType(
            {bytes(d): p for d, p in (positions or {}).items()}
        )

    @classmethod
    def from_digests(cls, digests: Iterable[bytes]) -> "IndexedLookup":
        """Index leaf digests in order; a later duplicate overwrites the earlier position."""
        return cls({bytes(d): p for p, d in enumerate(digests)})

    @property
    def is_indexed(self) -> bool:
        return True

    def find(self, digest: bytes) -> Optional[int]:
        return self._positions.get(bytes(digest))

    def __len__(self) -> int:
        return len(self._positions)


class LinearScanLookup(LeafLookup):
    """
    Linear scan over the leaf level, O(leaf_count).

    Args:
        array: Flat tree array (leaf level first)
        leaf_count: Number of real (unpadded) leaves
        output_len: Digest length in bytes
    """

    def __init__(self, array: bytes, leaf_count: int, output_len: int) -> None:
        self._array = array
        self._leaf_count = leaf_count
        self._output_len = output_len

    @property
    def is_indexed(self) -> bool:
        return False

    def find(self, digest: bytes) -> Optional[int]:
        if len(digest) != self._output_len:
            return None
        view = memoryview(self._array)
        size = self._output_len
        # Backwards, so the last duplicate wins like in IndexedLookup
        for position in range(self._leaf_count - 1, -1, -1):
            start = position * size
            if view[start:start + size] == digest:
                return position
        return None


__all__ = [
    "LeafLookup",
    "IndexedLookup",
    "LinearScanLookup",
]
