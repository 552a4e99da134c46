"""
Cryptographic utilities.

Hash primitives injected into merkle trees.
"""
from .hashing import (
    HashFunc,
    SHA256,
    SHA512,
    SHA3_256,
    BLAKE2B,
    HASH_FUNCS,
    sha256,
    get_hash_func,
    hash_concat,
    to_hex,
    from_hex,
)

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
