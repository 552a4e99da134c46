"""
Hashing Utilities
Hash primitives injected into trees, plus hex helpers.

This module provides:
- HashFunc: a named bytes -> bytes primitive with error wrapping
- Stock primitives (SHA-256, SHA-512, SHA3-256, BLAKE2b) backed by hashlib
- Leaf/parent helpers and 0x-prefixed hex encoding/decoding

Determinism Notes:
- Parent digests are always hash(left || right), never reordered
- Hex formatting is caller-side presentation, not part of any digest
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable

from merkletree.schemas.errors import ConfigurationError, HashError, MerkleTreeException


@dataclass(frozen=True)
class HashFunc:
    """
    A named one-way function bytes -> digest.

    Any failure inside the wrapped callable surfaces as HashError, so
    callers only ever see the error taxonomy.

    Attributes:
        name: Algorithm name (used in logs and error details)
        func: The underlying callable
    """
    name: str
    func: Callable[[bytes], bytes]

    def calculate(self, data: bytes) -> bytes:
        """
        Compute the digest of data.

        Raises:
            HashError: If the primitive fails or returns something other than bytes
        """
        try:
            digest = self.func(bytes(data))
        except MerkleTreeException:
            raise
        except Exception as e:
            raise HashError(
                f"{self.name} digest computation failed: {e}",
                algorithm=self.name,
            ) from e

        if not isinstance(digest, bytes):
            raise HashError(
                f"{self.name} returned {type(digest).__name__}, expected bytes",
                algorithm=self.name,
            )
        return digest

    def __call__(self, data: bytes) -> bytes:
        return self.calculate(data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def _hashlib_func(algorithm: str) -> Callable[[bytes], bytes]:
    def digest(data: bytes) -> bytes:
        return hashlib.new(algorithm, data).digest()

    return digest


SHA256 = HashFunc("sha256", sha256)
SHA512 = HashFunc("sha512", _hashlib_func("sha512"))
SHA3_256 = HashFunc("sha3_256", _hashlib_func("sha3_256"))
BLAKE2B = HashFunc("blake2b", _hashlib_func("blake2b"))

HASH_FUNCS: dict[str, HashFunc] = {
    h.name: h for h in (SHA256, SHA512, SHA3_256, BLAKE2B)
}


def get_hash_func(name: str) -> HashFunc:
    """
    Resolve a stock hash primitive by name (case-insensitive, '-' tolerated).

    Raises:
        ConfigurationError: If the algorithm is not registered
    """
    key = name.strip().lower().replace("-", "")
    if key == "sha3256":
        key = "sha3_256"
    try:
        return HASH_FUNCS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown hash algorithm: {name}",
            details={"available": sorted(HASH_FUNCS)},
        ) from None


def hash_concat(hash_func: HashFunc, left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation left || right.

    This is the parent rule for every internal node. Order is significant.
    """
    return hash_func.calculate(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes. The 0x prefix is optional.

    Raises:
        ValueError: On odd length or invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunc",
    "SHA256",
    "SHA512",
    "SHA3_256",
    "BLAKE2B",
    "HASH_FUNCS",
    "sha256",
    "get_hash_func",
    "hash_concat",
    "to_hex",
    "from_hex",
]
