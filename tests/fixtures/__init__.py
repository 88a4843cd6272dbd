"""
Test fixtures package for vmt tests.

This package provides factory functions for creating test objects:
- common.py: leaf values, trees in both lookup modes, tampered proofs

Usage:
    from fixtures.common import make_values, make_tree
"""
