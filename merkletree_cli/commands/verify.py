"""
CLI Verify Commands

- verify: rebuild a tree from a payload file, re-verify it and compare
  against a committed root
- check-proof: replay a saved proof file without the payload set

Usage:
    merkletree verify payloads.json --root <hex> [--json]
    merkletree check-proof proof.json [--root <hex>] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from merkletree.crypto.hashing import from_hex, get_hash_func
from merkletree.merkle import MerkleProof, MerkleVerifier
from merkletree_cli.commands.root import build_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a verification for CLI output."""
    source: str = ""
    root: str = ""
    expected_root: str | None = None
    tree_ok: bool = False
    root_ok: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.expected_root is None:
            del d["expected_root"]
        if self.root_ok is None:
            del d["root_ok"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        if not self.tree_ok:
            return False
        if self.root_ok is not None and not self.root_ok:
            return False
        return True


def _print_summary(summary: VerifySummary, as_json: bool) -> None:
    if as_json:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    status = "OK" if summary.all_ok else "FAILED"
    print(f"Verification {status}: {summary.source}")
    print(f"  root:          {summary.root}")
    if summary.expected_root is not None:
        print(f"  expected root: {summary.expected_root}")
    for error in summary.errors:
        print(f"  - {error}")


def verify_cmd(args: Namespace) -> int:
    """Handle the verify command."""
    tree = build_tree(args)
    summary = VerifySummary(source=str(args.file), root=tree.root_hex)

    summary.tree_ok = tree.verify()
    if not summary.tree_ok:
        summary.errors.append("tree does not re-derive its committed root")

    if args.root:
        expected = from_hex(args.root)
        summary.expected_root = expected.hex()
        summary.root_ok = expected == tree.root_digest
        if not summary.root_ok:
            summary.errors.append("root digest does not match the expected root")

    _print_summary(summary, args.json)
    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED


def check_proof_cmd(args: Namespace) -> int:
    """Handle the check-proof command."""
    path = Path(args.proof)
    if not path.exists():
        print(f"Error: proof file not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    data = json.loads(path.read_text(encoding="utf-8"))
    hash_func = get_hash_func(data["algorithm"]) if "algorithm" in data else args.hash_func

    summary = VerifySummary(source=str(path), root=data["root"])

    try:
        proof = MerkleProof(
            leaf=from_hex(data["leaf"]),
            siblings=tuple(from_hex(s) for s in data["siblings"]),
            directions=tuple(data["directions"]),
            root=from_hex(data["root"]),
        )
    except ValueError as e:
        summary.errors.append(f"malformed proof: {e}")
        _print_summary(summary, args.json)
        return EXIT_VERIFICATION_FAILED

    summary.root = proof.root.hex()
    summary.tree_ok = MerkleVerifier.verify(proof, hash_func)
    if not summary.tree_ok:
        summary.errors.append("proof does not reproduce its root")

    if args.root:
        expected = from_hex(args.root)
        summary.expected_root = expected.hex()
        summary.root_ok = expected == proof.root
        if not summary.root_ok:
            summary.errors.append("proof root does not match the expected root")

    logger.debug(f"Checked proof {path}: ok={summary.all_ok}")
    _print_summary(summary, args.json)
    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED
