"""
CLI Verify Command

Verify a hex-encoded proof against a hex-encoded root offline.

Usage:
    vmt verify 0x<proof> 0x<root> [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from vmt.config.runtime import TreeConfig
from vmt.crypto.hashing import from_hex
from vmt.merkle.proof import verify_proof_or_raise
from vmt.schemas.errors import InvalidProofException, ProofError


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    config: TreeConfig = args.tree_config
    algorithm = config.digest_algorithm()
    proof = from_hex(args.proof)
    root = from_hex(args.root)

    logger.info(f"Verifying {len(proof)}-byte proof with {algorithm.name}")
    try:
        verify_proof_or_raise(proof, root, algorithm)
    except InvalidProofException as e:
        error = ProofError(
            code=e.code,
            message=e.message,
            details=e.details,
            proof_size=len(proof),
            output_len=algorithm.output_len,
        )
        if args.json:
            print(json.dumps({"valid": False, "error": error.model_dump()}, indent=2))
        else:
            print(f"INVALID: {e.message}")
        return EXIT_VERIFICATION_FAILED

    if args.json:
        print(json.dumps({"valid": True, "algorithm": algorithm.name}, indent=2))
    else:
        print("VALID")
    return EXIT_SUCCESS
