"""CLI subcommand handlers."""

from . import tree, verify

__all__ = ["tree", "verify"]
