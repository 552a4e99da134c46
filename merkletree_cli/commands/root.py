"""
CLI Root Command

Build a tree over a payload file and print its root digest.

Usage:
    merkletree root payloads.json [--algorithm sha256] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from merkletree.merkle import MerkleTree
from merkletree_cli.payload_io import load_payloads


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def build_tree(args: Namespace) -> MerkleTree:
    """Load the payload file named by args and build its tree."""
    payloads = load_payloads(args.file, args.payload_type)
    tree = MerkleTree(payloads, args.hash_func)
    logger.info(f"Built tree over {len(payloads)} payloads: root={tree.root_hex}")
    return tree


def root_cmd(args: Namespace) -> int:
    """Handle the root command."""
    tree = build_tree(args)

    summary = {
        "root": tree.root_hex,
        "algorithm": tree.hash_func.name,
        "payloads": len(tree),
        "leaves": len(tree.leaves),
        "depth": tree.depth,
    }

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"Root:      {summary['root']}")
        print(f"Algorithm: {summary['algorithm']}")
        print(f"Payloads:  {summary['payloads']} ({summary['leaves']} leaves)")
        print(f"Depth:     {summary['depth']}")

    return EXIT_SUCCESS
