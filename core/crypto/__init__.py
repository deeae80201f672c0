"""
Core cryptographic utilities.

Provides SHA-256 and domain-separated (tagged) hashing.
"""
from .hashing import (
    DIGEST_SIZE,
    ZERO_DIGEST,
    TagHashCache,
    DEFAULT_TAG_CACHE,
    sha256,
    tag_digest,
    tagged_hash,
    to_hex,
    from_hex,
    hash_concat,
)

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
