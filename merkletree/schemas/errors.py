"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for tree construction, hashing and
verification. Defines both a Pydantic model for structured error
communication and Python exceptions for control flow.

"Not found" and "verification failed" are NOT errors: they are reported
as False / empty results by the tree operations.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"

    # Hashing Errors
    HASH_ERROR = "HASH_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Payload Errors
    PAYLOAD_COMPARISON_ERROR = "PAYLOAD_COMPARISON_ERROR"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error communication.

    Used where errors cross a process boundary (e.g. CLI JSON output)
    instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.HASH_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleTreeException":
        """Convert this error model to a raised exception."""
        return MerkleTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleTreeException(Exception):
    """
    Base exception for all merkle tree errors.

    Carries structured error information and can be converted
    to a MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_TREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(MerkleTreeException):
    """Raised when a tree is constructed from zero payloads."""

    def __init__(
        self,
        message: str = "cannot construct tree with no payload",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


class HashError(MerkleTreeException):
    """Raised when a payload digest or an internal fold cannot be computed."""

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
            code=ErrorCodes.HASH_ERROR,
            details=full_details,
        )


class CanonicalizationException(HashError):
    """Raised when canonical serialization of a payload fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.code = ErrorCodes.CANONICALIZATION_ERROR


class PayloadComparisonError(MerkleTreeException):
    """Raised when a payload equality check itself fails (e.g. schema mismatch)."""

    def __init__(
        self,
        message: str,
        payload_type: str | None = None,
        other_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if payload_type:
            full_details["payload_type"] = payload_type
        if other_type:
            full_details["other_type"] = other_type
        super().__init__(
            message=message,
            code=ErrorCodes.PAYLOAD_COMPARISON_ERROR,
            details=full_details,
        )


class ConfigurationError(MerkleTreeException):
    """Raised for invalid configuration, e.g. an unknown hash algorithm."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
        )
