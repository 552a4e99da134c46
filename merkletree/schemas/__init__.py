"""
Schemas: error taxonomy and canonical serialization.

Payload types live in merkletree.schemas.payloads (imported explicitly,
since they depend on merkletree.crypto).
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)
from .errors import (
    CanonicalizationException,
    ConfigurationError,
    EmptyInputError,
    ErrorCodes,
    HashError,
    MerkleError,
    MerkleTreeException,
    PayloadComparisonError,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationError",
    "EmptyInputError",
    "ErrorCodes",
    "HashError",
    "MerkleError",
    "MerkleTreeException",
    "PayloadComparisonError",
]
