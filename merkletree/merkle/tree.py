"""
Merkle Tree
The tree aggregate: owns the root, the ordered leaves, the committed root
digest and the hash primitive.

Operations:
- rebuild / rebuild_with: whole-tree reconstruction (no partial updates)
- verify: full re-derivation of the root from leaf payloads
- verify_payload: membership check plus per-hop consistency of stored digests
- get_merkle_path / build_proof: membership path extraction

Guarantees:
- verify() trusts no stored digest; it compares a fresh re-derivation
  against the committed root_digest.
- verify_payload() is weaker: it checks each ancestor of the matching leaf
  against its children's stored digests, and never compares against
  root_digest. A consistently re-chained tree with a different root passes.
- "Not a member" is a False / empty result, never an exception.

Not safe for concurrent rebuilds: readers must not run while a rebuild is
in progress on the same instance.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Union

from merkletree.crypto.hashing import SHA256, HashFunc, hash_concat
from merkletree.schemas.payloads import Payload

from .builder import build
from .node import Node, payload_digest, payloads_equal
from .proofs import Direction, MerkleProof


logger = logging.getLogger(__name__)


def _as_hash_func(hash_func: Union[HashFunc, Callable[[bytes], bytes]]) -> HashFunc:
    if isinstance(hash_func, HashFunc):
        return hash_func
    if not callable(hash_func):
        raise TypeError(f"hash_func must be callable, got {type(hash_func).__name__}")
    return HashFunc(getattr(hash_func, "__name__", "custom"), hash_func)


class MerkleTree:
    """
    A binary hash tree committing to an ordered list of payloads.

    Example:
        >>> tree = MerkleTree([BytesPayload(b"a"), BytesPayload(b"b")])
        >>> tree.verify()
        True
    """

    def __init__(
        self,
        payloads: Sequence[Payload],
        hash_func: Union[HashFunc, Callable[[bytes], bytes]] = SHA256,
    ) -> None:
        """
        Build a new tree.

        Args:
            payloads: Non-empty ordered payloads
            hash_func: Primitive used for every internal fold; a plain
                bytes -> bytes callable is accepted

        Raises:
            EmptyInputError: If payloads is empty
            HashError: If any digest computation fails
        """
        self._hash_func = _as_hash_func(hash_func)
        root, leaves = build(payloads, self._hash_func)
        self.root: Node = root
        self.leaves: list[Node] = leaves
        self.root_digest: bytes = root.digest

    @property
    def hash_func(self) -> HashFunc:
        return self._hash_func

    @property
    def root_hex(self) -> str:
        return self.root_digest.hex()

    @property
    def payloads(self) -> list[Payload]:
        """The real (non-duplicate) payloads in insertion order."""
        return [leaf.payload for leaf in self.leaves if not leaf.is_duplicate]

    @property
    def depth(self) -> int:
        """Number of edges from a leaf to the root."""
        depth = 0
        node = self.leaves[0].parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def __len__(self) -> int:
        return len(self.payloads)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self.leaves)}, "
            f"hash_func={self._hash_func.name!r}, root={self.root_hex})"
        )

    # -------------------------------------------------------------------------
    # Rebuild
    # -------------------------------------------------------------------------

    def rebuild(self) -> None:
        """Rebuild the tree from its current leaf payloads."""
        self.rebuild_with(self.payloads)

    def rebuild_with(self, payloads: Sequence[Payload]) -> None:
        """
        Replace the payloads and rebuild the whole structure in place.

        The new structure is staged completely before it is swapped in, so
        on failure the tree keeps its previous root, leaves and root digest.

        Raises:
            EmptyInputError: If payloads is empty
            HashError: If any digest computation fails
        """
        try:
            root, leaves = build(payloads, self._hash_func)
        except Exception:
            logger.warning("Rebuild failed; keeping previous tree (root=%s)", self.root_hex)
            raise

        self.root = root
        self.leaves = leaves
        self.root_digest = root.digest
        logger.debug("Rebuilt tree: leaves=%d root=%s", len(leaves), self.root_hex)

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify(self) -> bool:
        """
        Re-derive the root from leaf payloads and compare to root_digest.

        Raises:
            HashError: If any digest computation fails
        """
        calculated = self.root.verify_node(self._hash_func)
        ok = calculated == self.root_digest
        if not ok:
            logger.debug(
                "Tree verification failed: committed=%s calculated=%s",
                self.root_hex, calculated.hex(),
            )
        return ok

    def _find_leaf(self, candidate: Payload) -> Optional[Node]:
        for leaf in self.leaves:
            if payloads_equal(leaf.payload, candidate):
                return leaf
        return None

    def verify_payload(self, candidate: Payload) -> bool:
        """
        Check that candidate is a leaf and every ancestor digest is consistent.

        Returns False if no leaf matches, or if any ancestor's stored digest
        differs from hash(left.digest || right.digest) of its children.

        Raises:
            HashError: If any digest computation fails
            PayloadComparisonError: If a payload comparison fails
        """
        leaf = self._find_leaf(candidate)
        if leaf is None:
            logger.debug("Payload not found in tree")
            return False

        node = leaf.parent
        while node is not None:
            expected = hash_concat(self._hash_func, node.left.digest, node.right.digest)
            if expected != node.digest:
                logger.debug("Digest mismatch at ancestor %s", node.digest.hex())
                return False
            node = node.parent

        return True

    # -------------------------------------------------------------------------
    # Merkle path
    # -------------------------------------------------------------------------

    def get_merkle_path(self, candidate: Payload) -> tuple[list[bytes], list[Direction]]:
        """
        Trace the sibling digests needed to recompute the root from candidate.

        Returns:
            (siblings, directions), index 0 nearest the leaf; ([], []) if
            candidate is not in the tree

        Raises:
            PayloadComparisonError: If a payload comparison fails
        """
        current = self._find_leaf(candidate)
        if current is None:
            return [], []

        return self._path_from(current)

    def _path_from(self, current: Node) -> tuple[list[bytes], list[Direction]]:
        siblings: list[bytes] = []
        directions: list[Direction] = []

        parent = current.parent
        while parent is not None:
            if current.digest == parent.left.digest:
                siblings.append(parent.right.digest)
                directions.append(Direction.RIGHT)
            else:
                siblings.append(parent.left.digest)
                directions.append(Direction.LEFT)

            current = parent
            parent = parent.parent

        return siblings, directions

    def build_proof(self, candidate: Payload) -> Optional[MerkleProof]:
        """
        Build a self-contained MerkleProof for candidate, or None if absent.

        Raises:
            HashError: If the candidate digest cannot be computed
            PayloadComparisonError: If a payload comparison fails
        """
        siblings, directions = self.get_merkle_path(candidate)
        if not siblings:
            return None

        return MerkleProof(
            leaf=payload_digest(candidate),
            siblings=tuple(siblings),
            directions=tuple(directions),
            root=self.root_digest,
        )

    def build_proof_at(self, index: int) -> MerkleProof:
        """
        Build a MerkleProof for the payload at index, by position.

        Unlike build_proof, equal payloads elsewhere in the tree do not
        affect which leaf is proven.

        Raises:
            IndexError: If index is out of range for the real payloads
        """
        count = len(self)
        if index < 0 or index >= count:
            raise IndexError(f"Payload index {index} out of range for {count} payloads")

        leaf = self.leaves[index]
        siblings, directions = self._path_from(leaf)
        return MerkleProof(
            leaf=leaf.digest,
            siblings=tuple(siblings),
            directions=tuple(directions),
            root=self.root_digest,
        )


__all__ = [
    "MerkleTree",
]
