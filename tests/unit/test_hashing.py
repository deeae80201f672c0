"""
Tagged Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- sha256 stability
- tagged_hash construction and domain separation
- tag cache behaviour (process-wide and scoped)
- to_hex/from_hex
"""
import hashlib
import threading

import pytest

from core.crypto.hashing import (
    DEFAULT_TAG_CACHE,
    DIGEST_SIZE,
    ZERO_DIGEST,
    TagHashCache,
    from_hex,
    hash_concat,
    sha256,
    tag_digest,
    tagged_hash,
    to_hex,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        """Test sha256 of empty bytes."""
        assert sha256(b"") == hashlib.sha256(b"").digest()


class TestTaggedHash:
    """Tests for tagged_hash() function."""

    def test_matches_doubled_tag_prefix_construction(self):
        """tagged_hash = sha256(sha256(tag) || sha256(tag) || msg)."""
        tag_hash = hashlib.sha256(b"TestTag").digest()
        expected = hashlib.sha256(tag_hash + tag_hash + b"TestMessage").digest()

        assert tagged_hash("TestTag", b"TestMessage") == expected

    def test_output_is_32_bytes(self):
        result = tagged_hash("TestTag", b"TestMessage")

        assert len(result) == DIGEST_SIZE
        assert len(result.hex()) == 64

    def test_consistent_for_same_input(self):
        assert tagged_hash("TestTag", b"TestMessage") == tagged_hash("TestTag", b"TestMessage")

    def test_different_tags_different_hashes(self):
        assert tagged_hash("Tag1", b"TestMessage") != tagged_hash("Tag2", b"TestMessage")

    def test_differs_from_plain_sha256(self):
        assert tagged_hash("TestTag", b"TestMessage") != sha256(b"TestMessage")

    def test_empty_message(self):
        result = tagged_hash("TestTag", b"")

        assert len(result) == 32

    def test_empty_tag(self):
        empty = sha256(b"")
        assert tagged_hash("", b"x") == sha256(empty + empty + b"x")

    def test_large_message(self):
        result = tagged_hash("TestTag", b"x" * 10000)

        assert len(result) == 32

    def test_unicode_tag_encoded_as_utf8(self):
        tag_hash = hashlib.sha256("Réserve".encode("utf-8")).digest()
        expected = hashlib.sha256(tag_hash + tag_hash + b"m").digest()

        assert tagged_hash("Réserve", b"m") == expected

    def test_hash_concat(self):
        left, right = sha256(b"l"), sha256(b"r")

        assert hash_concat("Branch", left, right) == tagged_hash("Branch", left + right)


class TestTagCache:
    """Tests for tag digest memoization."""

    def test_default_cache_populated_on_use(self):
        tag = "TestTagCache_DefaultPopulated"
        tagged_hash(tag, b"m")

        assert tag in DEFAULT_TAG_CACHE
        assert tag_digest(tag) == sha256(tag.encode("utf-8"))

    def test_scoped_cache_isolated_from_default(self, scoped_cache):
        tag = "TestTagCache_ScopedOnly"
        result = tagged_hash(tag, b"m", cache=scoped_cache)

        assert tag in scoped_cache
        assert tag not in DEFAULT_TAG_CACHE
        assert result == tagged_hash(tag, b"m", cache=TagHashCache())

    def test_empty_scoped_cache_receives_first_tag(self):
        cache = TagHashCache()
        assert len(cache) == 0

        tagged_hash("TestTagCache_FreshScoped", b"m", cache=cache)

        assert len(cache) == 1
        assert "TestTagCache_FreshScoped" not in DEFAULT_TAG_CACHE
        assert tag_digest("TestTagCache_FreshScoped", cache) == cache.get("TestTagCache_FreshScoped")

    def test_cache_counts_distinct_tags(self, scoped_cache):
        for _ in range(3):
            tagged_hash("A", b"1", cache=scoped_cache)
            tagged_hash("B", b"2", cache=scoped_cache)

        assert len(scoped_cache) == 2

    def test_clear(self, scoped_cache):
        tagged_hash("A", b"1", cache=scoped_cache)
        scoped_cache.clear()

        assert len(scoped_cache) == 0
        assert "A" not in scoped_cache

    def test_concurrent_first_use(self, scoped_cache):
        """Racing first use of a tag stores one consistent digest."""
        results: list[bytes] = []
        lock = threading.Lock()

        def worker():
            digest = tagged_hash("RaceTag", b"payload", cache=scoped_cache)
            with lock:
                results.append(digest)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 1
        assert len(scoped_cache) == 1
        assert scoped_cache.get("RaceTag") == sha256(b"RaceTag")


class TestHexConversion:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_lowercase_no_prefix(self):
        assert to_hex(bytes.fromhex("DEADBEEF")) == "deadbeef"

    def test_from_hex_plain(self):
        assert from_hex("deadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_with_prefix(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_round_trip_digest(self):
        digest = sha256(b"round trip")

        assert from_hex(to_hex(digest)) == digest

    def test_from_hex_odd_length_raises(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("abc")

    def test_from_hex_invalid_chars_raises(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("zz")

    def test_zero_digest(self):
        assert ZERO_DIGEST == bytes(32)
        assert to_hex(ZERO_DIGEST) == "0" * 64
