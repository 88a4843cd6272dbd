"""
vmt CLI

Command-line interface for building Merkle roots and proofs over
line-oriented leaf files.

Usage:
    python -m vmt_cli root leaves.txt
    python -m vmt_cli prove leaves.txt "some leaf"
    python -m vmt_cli verify 0x<proof> 0x<root>
"""

__version__ = "0.1.0"
