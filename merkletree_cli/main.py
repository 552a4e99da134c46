"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkletree_cli root <payloads.json> [--algorithm NAME] [--json]
    python -m merkletree_cli proof <payloads.json> --index N [--out PATH] [--json]
    python -m merkletree_cli verify <payloads.json> --root HEX [--json]
    python -m merkletree_cli check-proof <proof.json> [--root HEX] [--json]

Environment Variables:
    MERKLETREE_HASH_ALGORITHM   Hash primitive (default: sha256)
    MERKLETREE_LOG_LEVEL        Log level (default: INFO)
    MERKLETREE_LOG_FILE         Additional log file
    MERKLETREE_OUTPUT_FORMAT    human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkletree.config import TreeConfig
from merkletree.crypto.hashing import HASH_FUNCS, get_hash_func
from merkletree.schemas.errors import MerkleTreeException
from merkletree_cli import __version__
from merkletree_cli.commands import proof, root, verify
from merkletree_cli.payload_io import PAYLOAD_TYPES


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

DEFAULT_CONFIG_FILES = (Path("merkletree.yaml"), Path("merkletree.yml"))


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_config(path: Path | None = None) -> TreeConfig:
    """
    Load configuration from a YAML file, then overlay environment variables.

    Without an explicit path, ./merkletree.yaml (or .yml) is used if present.
    """
    if path is None:
        path = next((p for p in DEFAULT_CONFIG_FILES if p.exists()), None)

    config = TreeConfig.from_yaml(path) if path is not None else TreeConfig()
    return config.with_env_overrides()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        choices=sorted(HASH_FUNCS),
        help="Hash primitive (default: from config or sha256)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output results as JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def _add_payload_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        type=Path,
        help="JSON file containing a list of payload items",
    )
    parser.add_argument(
        "--payload-type",
        type=str,
        choices=PAYLOAD_TYPES,
        default="auto",
        help="How to interpret items (default: auto)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkletree",
        description="Build merkle trees over payload lists, extract and verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./merkletree.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root digest of a payload file",
    )
    _add_payload_arguments(root_parser)
    _add_common_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Extract the merkle path for one payload",
    )
    _add_payload_arguments(proof_parser)
    proof_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the payload to prove",
    )
    proof_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof as JSON to this path",
    )
    _add_common_arguments(proof_parser)
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Re-verify a payload file and compare against a committed root",
    )
    _add_payload_arguments(verify_parser)
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Expected root digest (hex)",
    )
    _add_common_arguments(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- check-proof command ---
    check_parser = subparsers.add_parser(
        "check-proof",
        help="Replay a saved proof file",
    )
    check_parser.add_argument(
        "proof",
        type=Path,
        help="Proof JSON file (as written by 'proof --out')",
    )
    check_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Expected root digest (hex)",
    )
    _add_common_arguments(check_parser)
    check_parser.set_defaults(func=verify.check_proof_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    args.config_obj = config
    if args.json is None:
        args.json = config.output_format == "json"

    try:
        args.hash_func = get_hash_func(args.algorithm or config.hash_algorithm)
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleTreeException as e:
        if args.debug:
            traceback.print_exc()
        if args.json:
            print(json.dumps({"error": e.to_error_model().model_dump()}, indent=2))
        elif not args.debug:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
