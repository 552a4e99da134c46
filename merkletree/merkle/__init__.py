"""
Merkle Tree and Commitments
Binary hash tree construction, whole-tree verification and membership proofs.

This package provides:
- Node: a tree vertex with a weak parent back-reference
- build: leaf duplication + bottom-up folding into a single root
- MerkleTree: the aggregate (rebuild, verify, verify_payload, get_merkle_path)
- MerkleProof / verify_merkle_path: stateless proof replay
- MerkleProver / MerkleVerifier: convenience wrappers

Commitment Rules:
1. Leaf digest: payload.digest()
2. Parent digest: hash(left || right)
3. Odd leaf count: duplicate the last leaf once
4. Odd internal level: pair the last node with itself

Usage:
    from merkletree.merkle import MerkleTree, verify_merkle_path
    from merkletree.crypto import SHA256

    tree = MerkleTree(payloads, SHA256)
    siblings, directions = tree.get_merkle_path(payloads[2])
    assert verify_merkle_path(payloads[2].digest(), siblings, directions, tree.root_digest)
"""
from .node import (
    Node,
    payload_digest,
    payloads_equal,
)

from .builder import (
    build,
    build_leaves,
    fold_level,
)

from .proofs import (
    Direction,
    MerkleProof,
    compute_root_from_path,
    verify_merkle_path,
    verify_merkle_proof,
)

from .tree import MerkleTree

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Node",
    "MerkleTree",
    "Direction",
    "MerkleProof",
    # Construction
    "build",
    "build_leaves",
    "fold_level",
    # Payload helpers
    "payload_digest",
    "payloads_equal",
    # Proof replay
    "compute_root_from_path",
    "verify_merkle_path",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
