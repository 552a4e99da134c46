"""
Schemas & Payloads
File: payloads.py

Purpose: The capability contract every tree item must satisfy, and the
stock payload types shipped with the library.

A payload must provide:
- digest(): deterministic digest of its own content
- equals(other): explicit equality against another payload

There is no implicit structural equality: every payload type defines
equals() itself.
"""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from merkletree.crypto.hashing import SHA256, HashFunc

from .canonical import dumps_canonical
from .errors import CanonicalizationException, HashError, PayloadComparisonError


# Characters escaped as \uXXXX inside strings on top of the JSON minimum
_HTML_SAFE_ESCAPES = {
    ord(c): "\\u%04x" % ord(c)
    for c in ("<", ">", "&", "\N{LINE SEPARATOR}", "\N{PARAGRAPH SEPARATOR}")
}


def _json_string(value: str) -> str:
    """Encode a string with HTML-safe escaping (<, >, &, U+2028, U+2029)."""
    return json.dumps(value, ensure_ascii=False).translate(_HTML_SAFE_ESCAPES)


def _json_float(value: float) -> str:
    """
    Encode a float using the shortest round-trip digits.

    Fixed notation for 1e-6 <= |x| < 1e21 (and zero), exponent notation
    otherwise with a single-digit negative exponent left unpadded:
    1e-05 -> 0.00001, 5.0 -> 5, 1.5e-07 -> 1.5e-7, 1e21 -> 1e+21.

    Raises:
        ValueError: On NaN or infinity
    """
    if not math.isfinite(value):
        raise ValueError(f"Unsupported float value: {value}")

    shortest = repr(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        mantissa, exponent = shortest.split("e")
        sign, digits = exponent[0], exponent[1:]
        if sign == "-" and len(digits) == 2 and digits[0] == "0":
            digits = digits[1:]
        return f"{mantissa}e{sign}{digits}"

    fixed = format(Decimal(shortest), "f")
    if "." in fixed:
        fixed = fixed.rstrip("0").rstrip(".")
    return fixed


class Payload(ABC):
    """Data stored and verified by the tree."""

    @abstractmethod
    def digest(self) -> bytes:
        """
        Return the deterministic digest of this payload.

        Raises:
            HashError: If the payload cannot be serialized or hashed
        """

    @abstractmethod
    def equals(self, other: Payload) -> bool:
        """
        Return True if other represents the same payload.

        Raises:
            PayloadComparisonError: If the comparison itself fails
        """


class PaymentTransactionPayload(BaseModel, Payload):
    """
    A payment transaction between two addresses.

    The digest is SHA-256 over compact JSON in declared field order:
    {"sender_address":...,"receiver_address":...,"amount":...}

    Strings use HTML-safe escaping and the amount uses shortest round-trip
    digits (see _json_float), so digests match encoders that follow the
    same rules.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sender_address: str = Field(..., description="Address sending the funds")
    receiver_address: str = Field(..., description="Address receiving the funds")
    amount: float = Field(..., description="Transferred amount")

    hash_func: ClassVar[HashFunc] = SHA256

    def serialize(self) -> bytes:
        """Serialize to the compact JSON form the digest is computed over."""
        try:
            return (
                '{"sender_address":' + _json_string(self.sender_address)
                + ',"receiver_address":' + _json_string(self.receiver_address)
                + ',"amount":' + _json_float(float(self.amount)) + "}"
            ).encode("utf-8")
        except ValueError as e:
            raise HashError(
                f"Cannot serialize payment transaction: {e}",
                details={"sender_address": self.sender_address},
            ) from e

    def digest(self) -> bytes:
        return self.hash_func.calculate(self.serialize())

    def equals(self, other: Payload) -> bool:
        if not isinstance(other, Payload):
            raise PayloadComparisonError(
                "Cannot compare payment transaction with a non-payload value",
                payload_type=type(self).__name__,
                other_type=type(other).__name__,
            )
        if not isinstance(other, PaymentTransactionPayload):
            return False
        return (
            self.sender_address == other.sender_address
            and self.receiver_address == other.receiver_address
            and self.amount == other.amount
        )


@dataclass(frozen=True)
class CanonicalPayload(Payload):
    """
    Any JSON-like value, hashed over its canonical JSON form.

    Key order of dicts does not affect the digest or equality.
    """
    value: Any

    hash_func: ClassVar[HashFunc] = SHA256

    def digest(self) -> bytes:
        return self.hash_func.calculate(dumps_canonical(self.value).encode("utf-8"))

    def equals(self, other: Payload) -> bool:
        if not isinstance(other, CanonicalPayload):
            return False
        try:
            return dumps_canonical(self.value) == dumps_canonical(other.value)
        except CanonicalizationException as e:
            raise PayloadComparisonError(
                f"Cannot compare malformed payload content: {e.message}",
                payload_type=type(self).__name__,
                details=e.details,
            ) from e


@dataclass(frozen=True)
class BytesPayload(Payload):
    """Raw bytes, hashed as-is."""
    data: bytes

    hash_func: ClassVar[HashFunc] = SHA256

    def digest(self) -> bytes:
        return self.hash_func.calculate(self.data)

    def equals(self, other: Payload) -> bool:
        return isinstance(other, BytesPayload) and self.data == other.data


__all__ = [
    "Payload",
    "PaymentTransactionPayload",
    "CanonicalPayload",
    "BytesPayload",
]
