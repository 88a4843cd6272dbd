"""
Schemas Module

Error models and exceptions shared across vmt.
"""

from .errors import (
    ErrorCodes,
    VmtError,
    ProofError,
    VmtException,
    InvalidProofException,
    UnknownAlgorithmException,
    LeafEncodingException,
    ConfigException,
)

__all__ = [
    "ErrorCodes",
    "VmtError",
    "ProofError",
    "VmtException",
    "InvalidProofException",
    "UnknownAlgorithmException",
    "LeafEncodingException",
    "ConfigException",
]
