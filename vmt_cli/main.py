"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m vmt_cli root <leaves> [--json]
    python -m vmt_cli prove <leaves> <value> [--json]
    python -m vmt_cli verify <proof_hex> <root_hex> [--json]

Global options (before the subcommand):
    --config PATH       YAML configuration file
    --algorithm NAME    Digest algorithm (overrides config)
    --no-index          Use linear-scan leaf lookup
    --log-level LEVEL   Log level (overrides config)

Environment Variables:
    VMT_ALGORITHM       Digest algorithm (default: sha256)
    VMT_USE_INDEX       Build the leaf index (default: true)
    VMT_LOG_LEVEL       Log level (default: INFO)
    VMT_LOG_FILE        Optional log file
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from vmt.config.runtime import TreeConfig, get_default_config
from vmt_cli import __version__
from vmt_cli.commands import tree, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vmt",
        description="Build Merkle roots and inclusion proofs, and verify proofs offline.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        help="Digest algorithm, e.g. sha256, sha512, blake2b (overrides config)",
    )
    parser.add_argument(
        "--no-index",
        dest="use_index",
        action="store_false",
        default=None,
        help="Find leaves by linear scan instead of building an index",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of a leaf file",
        description="Build a tree over a file with one leaf per line and print its root.",
    )
    root_parser.add_argument(
        "leaves",
        type=str,
        help="Leaf file, one value per line ('-' for stdin)",
    )
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print an inclusion proof for a value",
        description="Build a tree over a leaf file and print the proof for one value.",
    )
    prove_parser.add_argument(
        "leaves",
        type=str,
        help="Leaf file, one value per line ('-' for stdin)",
    )
    prove_parser.add_argument(
        "value",
        type=str,
        help="Leaf value to prove",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    prove_parser.set_defaults(func=tree.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof against a root",
        description="Recompute the root from a hex proof and compare it to a hex root.",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Proof as 0x-prefixed hex",
    )
    verify_parser.add_argument(
        "root",
        type=str,
        help="Expected root as 0x-prefixed hex",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    return parser


def load_config(args: argparse.Namespace) -> TreeConfig:
    """Load config from --config (or the environment) and apply CLI overrides."""
    if args.config is not None:
        config = TreeConfig.from_yaml(args.config).with_env_overrides()
    else:
        config = get_default_config()

    overrides = {}
    if args.algorithm:
        overrides["algorithm"] = args.algorithm
    if args.use_index is not None:
        overrides["use_index"] = args.use_index
    if args.log_level:
        overrides["log_level"] = args.log_level
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not found or verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=config.log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.tree_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if config.log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
