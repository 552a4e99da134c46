"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around tree construction and path replay.

- MerkleProver: build trees / proofs straight from payloads
- MerkleVerifier: check proofs with only the hash primitive
"""
from __future__ import annotations

from typing import Optional, Sequence

from merkletree.crypto.hashing import SHA256, HashFunc
from merkletree.schemas.payloads import Payload

from .node import payload_digest
from .proofs import MerkleProof, verify_merkle_path, verify_merkle_proof
from .tree import MerkleTree


class MerkleProver:
    """
    Convenience class for generating roots and proofs.

    Example:
        >>> proof = MerkleProver.prove(payloads, payloads[1])
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def compute_root(payloads: Sequence[Payload], hash_func: HashFunc = SHA256) -> bytes:
        """Compute the root digest committing to payloads."""
        return MerkleTree(payloads, hash_func).root_digest

    @staticmethod
    def prove(
        payloads: Sequence[Payload],
        candidate: Payload,
        hash_func: HashFunc = SHA256,
    ) -> Optional[MerkleProof]:
        """
        Build a tree over payloads and prove candidate's membership.

        Returns:
            MerkleProof, or None if candidate is not among payloads
        """
        return MerkleTree(payloads, hash_func).build_proof(candidate)

    @staticmethod
    def prove_index(
        payloads: Sequence[Payload],
        index: int,
        hash_func: HashFunc = SHA256,
    ) -> MerkleProof:
        """
        Prove membership of the payload at index.

        Raises:
            IndexError: If index is out of range
        """
        return MerkleTree(payloads, hash_func).build_proof_at(index)


class MerkleVerifier:
    """Convenience class for verifying proofs without the tree."""

    @staticmethod
    def verify(proof: MerkleProof, hash_func: HashFunc = SHA256) -> bool:
        """Verify a proof against its own root."""
        return verify_merkle_proof(proof, hash_func)

    @staticmethod
    def verify_payload_in_root(
        payload: Payload,
        siblings: Sequence[bytes],
        directions: Sequence[int],
        root: bytes,
        hash_func: HashFunc = SHA256,
    ) -> bool:
        """
        Verify a payload is committed by root, given its merkle path.

        The payload is digested to produce the starting leaf.
        """
        return verify_merkle_path(
            payload_digest(payload), siblings, directions, root, hash_func
        )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
