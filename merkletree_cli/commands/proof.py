"""
CLI Proof Command

Print the merkle path for one item of a payload file.

Usage:
    merkletree proof payloads.json --index 2 [--json] [--out proof.json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from merkletree.merkle import Direction
from merkletree_cli.commands.root import build_tree


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Handle the proof command."""
    tree = build_tree(args)
    payloads = tree.payloads

    if args.index < 0 or args.index >= len(payloads):
        print(
            f"Error: index {args.index} out of range for {len(payloads)} payloads",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    proof = tree.build_proof_at(args.index)
    data = proof.to_dict()
    data["index"] = args.index
    data["algorithm"] = tree.hash_func.name

    if args.out:
        Path(args.out).write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info(f"Proof written to {args.out}")

    if args.json:
        print(json.dumps(data, indent=2))
    else:
        print(f"Item:  {args.index}")
        print(f"Leaf:  {data['leaf']}")
        print(f"Root:  {data['root']}")
        print("Path (leaf to root):")
        for sibling, direction in zip(proof.siblings, proof.directions):
            print(f"  {Direction(direction).name:<5} {sibling.hex()}")

    return EXIT_SUCCESS

