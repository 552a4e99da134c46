"""
merkletree - binary hash trees over ordered payloads.

Build a tree, commit to its root digest, re-verify the whole tree, and
extract or replay membership proofs.

Usage:
    from merkletree import MerkleTree, PaymentTransactionPayload, SHA256

    tree = MerkleTree(payloads, SHA256)
    tree.verify()
    siblings, directions = tree.get_merkle_path(payloads[0])
"""

from merkletree.crypto.hashing import (
    BLAKE2B,
    SHA3_256,
    SHA256,
    SHA512,
    HashFunc,
    get_hash_func,
)
from merkletree.merkle import (
    Direction,
    MerkleProof,
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    Node,
    compute_root_from_path,
    verify_merkle_path,
    verify_merkle_proof,
)
from merkletree.schemas.errors import (
    ConfigurationError,
    EmptyInputError,
    HashError,
    MerkleTreeException,
    PayloadComparisonError,
)
from merkletree.schemas.payloads import (
    BytesPayload,
    CanonicalPayload,
    Payload,
    PaymentTransactionPayload,
)

__version__ = "0.1.0"

__all__ = [
    # Hashing
    "HashFunc",
    "SHA256",
    "SHA512",
    "SHA3_256",
    "BLAKE2B",
    "get_hash_func",
    # Tree
    "MerkleTree",
    "Node",
    "Direction",
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
    "compute_root_from_path",
    "verify_merkle_path",
    "verify_merkle_proof",
    # Payloads
    "Payload",
    "PaymentTransactionPayload",
    "CanonicalPayload",
    "BytesPayload",
    # Errors
    "MerkleTreeException",
    "EmptyInputError",
    "HashError",
    "PayloadComparisonError",
    "ConfigurationError",
]
