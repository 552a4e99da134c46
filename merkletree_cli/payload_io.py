"""
CLI Payload Loading

Reads a JSON file holding a list of items and turns each item into a
payload:
- objects with exactly sender_address / receiver_address / amount become
  PaymentTransactionPayload (in "auto" mode)
- anything else becomes CanonicalPayload
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from merkletree.schemas.payloads import CanonicalPayload, Payload, PaymentTransactionPayload


logger = logging.getLogger(__name__)

PAYLOAD_TYPES = ("auto", "payment", "canonical")

_PAYMENT_FIELDS = frozenset(PaymentTransactionPayload.model_fields)


class PayloadFileError(Exception):
    """Raised when a payload file cannot be read or parsed."""


def payload_from_item(item: Any, payload_type: str = "auto") -> Payload:
    """Convert one decoded JSON item into a payload."""
    if payload_type == "canonical":
        return CanonicalPayload(item)

    is_payment = isinstance(item, dict) and set(item) == _PAYMENT_FIELDS
    if payload_type == "payment" or is_payment:
        try:
            return PaymentTransactionPayload.model_validate(item)
        except ValidationError as e:
            raise PayloadFileError(f"Invalid payment transaction: {e}") from e

    return CanonicalPayload(item)


def load_payloads(path: str | Path, payload_type: str = "auto") -> list[Payload]:
    """
    Load payloads from a JSON list file.

    Raises:
        PayloadFileError: If the file is missing, not JSON, or not a list
    """
    path = Path(path)
    if not path.exists():
        raise PayloadFileError(f"Payload file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PayloadFileError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise PayloadFileError(f"Payload file must contain a JSON list: {path}")

    payloads = [payload_from_item(item, payload_type) for item in data]
    logger.info(f"Loaded {len(payloads)} payloads from {path}")
    return payloads
