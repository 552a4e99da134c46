"""
Merkle Tree Builder
Pure construction of the node structure from an ordered list of payloads.

Construction Rules (Hard Contracts):
1. Leaf digest: payload.digest(), in input order
2. Odd leaf count: append one duplicate leaf (same digest and payload as
   the last leaf, is_duplicate=True)
3. Parent digest: hash(left.digest || right.digest), never reordered
4. Odd internal level: the last node is paired with itself
   (left and right are the same instance)
5. Folding stops when a level collapses to a single root

Rules 2 and 4 are distinct policies and both are embedded in every
committed root digest.
"""
from __future__ import annotations

import logging
from typing import Sequence

from merkletree.crypto.hashing import HashFunc, hash_concat
from merkletree.schemas.errors import EmptyInputError
from merkletree.schemas.payloads import Payload

from .node import Node, payload_digest


logger = logging.getLogger(__name__)


def build_leaves(payloads: Sequence[Payload]) -> list[Node]:
    """
    Build the leaf layer, duplicating the last leaf if the count is odd.

    Raises:
        EmptyInputError: If payloads is empty
        HashError: On the first payload whose digest cannot be computed
    """
    if len(payloads) == 0:
        raise EmptyInputError()

    leaves = [
        Node(digest=payload_digest(p), is_leaf=True, payload=p)
        for p in payloads
    ]

    if len(leaves) % 2 == 1:
        last = leaves[-1]
        leaves.append(
            Node(
                digest=last.digest,
                is_leaf=True,
                is_duplicate=True,
                payload=last.payload,
            )
        )

    return leaves


def fold_level(nodes: Sequence[Node], hash_func: HashFunc) -> list[Node]:
    """
    Pair adjacent nodes into their parents.

    An unpaired last node is folded with itself.
    """
    parents: list[Node] = []
    for i in range(0, len(nodes), 2):
        left = nodes[i]
        right = nodes[i + 1] if i + 1 < len(nodes) else left

        parent = Node(
            digest=hash_concat(hash_func, left.digest, right.digest),
            left=left,
            right=right,
        )
        left.parent = parent
        right.parent = parent
        parents.append(parent)

    return parents


def build(payloads: Sequence[Payload], hash_func: HashFunc) -> tuple[Node, list[Node]]:
    """
    Construct all tree levels from payloads up to the root.

    Args:
        payloads: Ordered payloads; order is preserved and significant
        hash_func: Primitive used for every internal fold

    Returns:
        (root, leaves) where leaves includes the duplicate leaf, if any

    Raises:
        EmptyInputError: If payloads is empty
        HashError: If any digest computation fails
    """
    leaves = build_leaves(payloads)

    level = leaves
    height = 0
    while True:
        level = fold_level(level, hash_func)
        height += 1
        if len(level) == 1:
            break

    root = level[0]
    logger.debug(
        "Built tree: payloads=%d leaves=%d height=%d root=%s",
        len(payloads), len(leaves), height, root.digest.hex(),
    )
    return root, leaves
