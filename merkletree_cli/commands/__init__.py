"""CLI subcommands."""

from . import proof, root, verify

__all__ = ["proof", "root", "verify"]
