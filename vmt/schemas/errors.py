"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for tree construction, proof handling and configuration.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Note that a missing leaf is not an error: build_proof() returns None.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Proof Errors
    INVALID_PROOF = "INVALID_PROOF"
    MALFORMED_PROOF = "MALFORMED_PROOF"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Hashing Errors
    UNKNOWN_ALGORITHM = "UNKNOWN_ALGORITHM"
    LEAF_ENCODING_ERROR = "LEAF_ENCODING_ERROR"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class VmtError(BaseModel):
    """
    Base error model for structured error reporting.

    Used where an error has to be passed along or serialized (for example
    the CLI's --json output) rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "VmtException":
        """Convert this error model to a raised exception."""
        return VmtException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class ProofError(VmtError):
    """Error model for proof verification failures."""

    code: str = Field(default=ErrorCodes.INVALID_PROOF)
    proof_size: int | None = Field(
        default=None,
        description="Size of the rejected proof in bytes",
    )
    output_len: int | None = Field(
        default=None,
        description="Digest length the proof was checked against",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VmtException(Exception):
    """
    Base exception for all vmt errors.

    This exception carries structured error information and can be
    converted to/from VmtError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "VMT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> VmtError:
        """Convert this exception to a VmtError model."""
        return VmtError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidProofException(VmtException):
    """Exception raised when a proof is malformed or does not lead to the root."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.INVALID_PROOF,
        proof_size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if proof_size is not None:
            full_details["proof_size"] = proof_size
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class UnknownAlgorithmException(VmtException):
    """Exception raised when a digest algorithm name cannot be resolved."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNKNOWN_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class LeafEncodingException(VmtException):
    """Exception raised when a leaf value has no byte view."""

    def __init__(
        self,
        message: str,
        value_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value_type:
            full_details["value_type"] = value_type
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )


class ConfigException(VmtException):
    """Exception raised when configuration values cannot be parsed."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
