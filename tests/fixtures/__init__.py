"""
Test fixtures package for merkletree tests.

- payments.py: payment transaction cases with pinned golden roots
- broken.py: payloads whose digest or comparison fails

Usage:
    from fixtures.payments import GOLDEN_CASES, golden_case
"""

from .broken import BrokenDigestPayload, BrokenEqualsPayload, make_bytes_payloads
from .payments import GOLDEN_CASES, GoldenCase, golden_case, tx

__all__ = [
    "BrokenDigestPayload",
    "BrokenEqualsPayload",
    "make_bytes_payloads",
    "GOLDEN_CASES",
    "GoldenCase",
    "golden_case",
    "tx",
]
