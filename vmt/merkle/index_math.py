"""
Module 03 - Index Arithmetic
Position arithmetic for nodes inside a level of the flat tree array.

All functions assume the level has already been padded to an even length
(duplicate-last rule), except the shape helpers which apply the padding
themselves.
"""
from __future__ import annotations


def sibling(index: int) -> int:
    """Position of the other child in the same pair (flip the lowest bit)."""
    return index ^ 1


def parent(index: int) -> int:
    """Position of the parent within the next level."""
    return index >> 1


def padded_len(level_len: int) -> int:
    """Level length after duplicating the last node of an odd level."""
    return level_len + (level_len & 1)


def next_level_len(level_len: int) -> int:
    """Length of the level built on top of a level of the given length."""
    return padded_len(level_len) // 2


def compute_tree_height(num_leaves: int) -> int:
    """
    Compute the height of a tree with the given number of leaves.

    Height counts every stored level, from the (padded) leaf level to the
    root level inclusive. A single leaf is paired with its own duplicate,
    so it already has height 2.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree height (0 for empty tree)

    Raises:
        ValueError: If num_leaves is negative
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    height = 1
    n = num_leaves
    while True:
        n = next_level_len(n)
        height += 1
        if n == 1:
            return height


def compute_nodes_count(num_leaves: int) -> int:
    """
    Compute the number of digests stored for a tree of the given size.

    Levels are padded one at a time, so this is summed per level rather
    than derived from the next power of two.

    Raises:
        ValueError: If num_leaves is negative
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    total = 0
    n = num_leaves
    while True:
        total += padded_len(n)
        n = next_level_len(n)
        if n == 1:
            return total + 1


__all__ = [
    "sibling",
    "parent",
    "padded_len",
    "next_level_len",
    "compute_tree_height",
    "compute_nodes_count",
]
