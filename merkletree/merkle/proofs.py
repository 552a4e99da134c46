"""
Merkle Path Replay
Proof types and the stateless verifier for membership paths.

A path is an ordered list of (sibling digest, direction) pairs, index 0
nearest the leaf. Replay starts from the candidate's payload digest:

    RIGHT: running = hash(running || sibling)
    LEFT:  running = hash(sibling || running)

and the proof is valid iff the final running digest equals the root.
Replay needs only the hash primitive, never the tree itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from merkletree.crypto.hashing import SHA256, HashFunc, hash_concat


class Direction(IntEnum):
    """Side of the sibling relative to the running digest."""
    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True)
class MerkleProof:
    """
    A membership proof for one payload.

    Construction rejects mismatched lengths and unknown directions with
    ValueError; use verify_merkle_path for untrusted raw paths.

    Attributes:
        leaf: Digest of the proven payload
        siblings: Sibling digests from the leaf level up to just below the root
        directions: Direction for each sibling
        root: The root digest this proof is against
    """
    leaf: bytes
    siblings: tuple[bytes, ...]
    directions: tuple[Direction, ...]
    root: bytes

    def __post_init__(self) -> None:
        if len(self.siblings) != len(self.directions):
            raise ValueError(
                f"Proof has {len(self.siblings)} siblings but "
                f"{len(self.directions)} directions"
            )
        object.__setattr__(self, "siblings", tuple(self.siblings))
        object.__setattr__(
            self, "directions", tuple(Direction(d) for d in self.directions)
        )

    def __len__(self) -> int:
        return len(self.siblings)

    def to_dict(self) -> dict:
        """Hex-encoded form for JSON output."""
        return {
            "leaf": self.leaf.hex(),
            "siblings": [s.hex() for s in self.siblings],
            "directions": [int(d) for d in self.directions],
            "root": self.root.hex(),
        }


def compute_root_from_path(
    leaf: bytes,
    siblings: Sequence[bytes],
    directions: Sequence[int],
    hash_func: HashFunc = SHA256,
) -> bytes:
    """
    Replay a merkle path from a leaf digest and return the resulting root.

    Raises:
        ValueError: If siblings and directions differ in length, or a
            direction is neither LEFT nor RIGHT
        HashError: If the primitive fails
    """
    if len(siblings) != len(directions):
        raise ValueError(
            f"Path has {len(siblings)} siblings but {len(directions)} directions"
        )

    running = leaf
    for sibling, direction in zip(siblings, directions):
        if Direction(direction) is Direction.RIGHT:
            running = hash_concat(hash_func, running, sibling)
        else:
            running = hash_concat(hash_func, sibling, running)

    return running


def verify_merkle_path(
    leaf: bytes,
    siblings: Sequence[bytes],
    directions: Sequence[int],
    root: bytes,
    hash_func: HashFunc = SHA256,
) -> bool:
    """
    Check that replaying the path from leaf reproduces root.

    Mismatched sibling/direction counts and directions other than LEFT or
    RIGHT are an invalid proof, not an error.
    """
    if len(siblings) != len(directions):
        return False
    if any(d not in (Direction.LEFT, Direction.RIGHT) for d in directions):
        return False

    return compute_root_from_path(leaf, siblings, directions, hash_func) == root


def verify_merkle_proof(proof: MerkleProof, hash_func: HashFunc = SHA256) -> bool:
    """Verify a MerkleProof against its own root."""
    return verify_merkle_path(
        proof.leaf, proof.siblings, proof.directions, proof.root, hash_func
    )


__all__ = [
    "Direction",
    "MerkleProof",
    "compute_root_from_path",
    "verify_merkle_path",
    "verify_merkle_proof",
]
