"""
Merkle Tree Node
A single vertex of the tree: leaf, duplicate leaf, or internal node.

Ownership runs downward only: an internal node owns its children, while
the parent link is a weak back-reference set during construction.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Optional

from merkletree.crypto.hashing import HashFunc, hash_concat
from merkletree.schemas.errors import HashError, MerkleTreeException, PayloadComparisonError
from merkletree.schemas.payloads import Payload


def payload_digest(payload: Payload) -> bytes:
    """Compute a payload digest, surfacing any failure as HashError."""
    try:
        digest = payload.digest()
    except MerkleTreeException:
        raise
    except Exception as e:
        raise HashError(
            f"Payload digest computation failed: {e}",
            details={"payload_type": type(payload).__name__},
        ) from e

    if not isinstance(digest, bytes):
        raise HashError(
            f"Payload digest must be bytes, got {type(digest).__name__}",
            details={"payload_type": type(payload).__name__},
        )
    return digest


def payloads_equal(payload: Payload, candidate: Payload) -> bool:
    """Compare two payloads, surfacing any failure as PayloadComparisonError."""
    try:
        return bool(payload.equals(candidate))
    except MerkleTreeException:
        raise
    except Exception as e:
        raise PayloadComparisonError(
            f"Payload comparison failed: {e}",
            payload_type=type(payload).__name__,
            other_type=type(candidate).__name__,
        ) from e


@dataclass(eq=False)
class Node:
    """
    A node, root, or leaf in the tree.

    Attributes:
        digest: Leaf: the payload digest. Internal: hash(left.digest || right.digest)
        is_leaf: True for leaves (including the duplicate leaf)
        is_duplicate: True only for the synthetic copy of the last real leaf
        left: Left child (internal nodes only)
        right: Right child (internal nodes only; may be the same node as left)
        payload: The wrapped payload (leaves only)
    """
    digest: bytes
    is_leaf: bool = False
    is_duplicate: bool = False
    left: Optional[Node] = field(default=None, repr=False)
    right: Optional[Node] = field(default=None, repr=False)
    payload: Optional[Payload] = None
    _parent: Optional[weakref.ReferenceType] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional[Node]:
        """The node this one was folded into, or None for the root."""
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def calculate_node_hash(self, hash_func: HashFunc) -> bytes:
        """
        Recompute this node's digest one level deep.

        Leaves re-derive from their payload; internal nodes hash the
        stored digests of their children.
        """
        if self.is_leaf:
            return payload_digest(self.payload)

        return hash_concat(hash_func, self.left.digest, self.right.digest)

    def verify_node(self, hash_func: HashFunc) -> bytes:
        """
        Walk down to the leaves and re-derive this subtree's digest.

        No stored digest is trusted: leaves contribute payload.digest()
        and every internal level is recomputed from its children.
        """
        if self.is_leaf:
            return payload_digest(self.payload)

        left = self.left.verify_node(hash_func)
        if self.right is self.left:
            right = left
        else:
            right = self.right.verify_node(hash_func)

        return hash_concat(hash_func, left, right)
