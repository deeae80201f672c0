"""
Tagged Hashing
Domain-separated SHA-256 hashing for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes
- Tagged hashing: SHA-256(SHA-256(tag) || SHA-256(tag) || message)
- A memoization cache for inner tag digests
- Hex encoding/decoding for transport

Domain Separation Rules (Hard Contracts):
1. tag_digest = sha256(tag.encode("utf-8"))
2. tagged_hash(tag, msg) = sha256(tag_digest || tag_digest || msg)
3. Leaf and branch hashes MUST use different tags in production trees
4. Every output is exactly 32 bytes, including for empty messages

Concurrency Notes:
- The default cache is process-wide and never evicted
- Reads are plain dict lookups; inserts take a narrow lock
- Racing first-use of a tag may compute the inner digest twice,
  both writers store the identical value
"""
from __future__ import annotations

import hashlib
import logging
from threading import Lock
from typing import Optional


logger = logging.getLogger(__name__)


DIGEST_SIZE = 32

# Sentinel digest of all zero bytes (used as the empty tree root)
ZERO_DIGEST: bytes = bytes(DIGEST_SIZE)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


class TagHashCache:
    """
    Memoization cache mapping a tag string to SHA-256(tag).

    The process-wide instance (``DEFAULT_TAG_CACHE``) is used unless a
    caller passes its own, e.g. to bound growth when tags are not
    compile-time constants.
    """

    def __init__(self) -> None:
        self._digests: dict[str, bytes] = {}
        self._lock = Lock()

    def get(self, tag: str) -> bytes:
        """Return SHA-256(tag), computing and storing it on first use."""
        digest = self._digests.get(tag)
        if digest is None:
            digest = sha256(tag.encode("utf-8"))
            with self._lock:
                self._digests[tag] = digest
            logger.debug("Cached tag digest for %r", tag)
        return digest

    def __contains__(self, tag: object) -> bool:
        return tag in self._digests

    def __len__(self) -> int:
        return len(self._digests)

    def clear(self) -> None:
        with self._lock:
            self._digests.clear()


DEFAULT_TAG_CACHE = TagHashCache()


def tag_digest(tag: str, cache: Optional[TagHashCache] = None) -> bytes:
    """Return the (memoized) inner digest SHA-256(tag)."""
    return (cache if cache is not None else DEFAULT_TAG_CACHE).get(tag)


def tagged_hash(tag: str, message: bytes, *, cache: Optional[TagHashCache] = None) -> bytes:
    """
    Compute a domain-separated hash of ``message`` under ``tag``.

    Rule: tagged_hash = sha256(sha256(tag) || sha256(tag) || message)

    Two different tags yield hash functions that are independent for
    practical purposes, even on identical messages.

    Args:
        tag: Domain-separation tag (e.g. "ProofOfReserve_Leaf")
        message: Raw bytes to hash, may be empty
        cache: Optional scoped tag cache; defaults to the process-wide one

    Returns:
        32-byte digest
    """
    prefix = tag_digest(tag, cache)
    h = hashlib.sha256()
    h.update(prefix)
    h.update(prefix)
    h.update(message)
    return h.digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string (no prefix).

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    An optional "0x" prefix is accepted and stripped.

    Args:
        hex_string: Hex string, with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the string has odd length or contains
                    invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
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


def hash_concat(tag: str, left: bytes, right: bytes, *, cache: Optional[TagHashCache] = None) -> bytes:
    """
    Tagged hash of the concatenation of two byte sequences.

    Used for branch nodes: parent = tagged_hash(tag, left || right)
    """
    return tagged_hash(tag, left + right, cache=cache)


__all__ = [
    "DIGEST_SIZE",
    "ZERO_DIGEST",
    "TagHashCache",
    "DEFAULT_TAG_CACHE",
    "sha256",
    "tag_digest",
    "tagged_hash",
    "to_hex",
    "from_hex",
    "hash_concat",
]
