"""
Merkle Tree Implementation
Tagged Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation over ordered records
- Inclusion proof generation for any record index
- Proof verification (recomputes a root from a record and its proof)
- A status-carrying proof result for callers that must tell
  "no proof needed" apart from "index out of range"

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = tagged_hash(leaf_tag, record)
2. Branch hashing: parent = tagged_hash(branch_tag, left || right)
3. Padding rule: an odd level pairs its last node with itself
4. Empty records: root is 32 zero bytes
5. Single record: root = tagged_hash(leaf_tag, record)

Proof Encoding:
- Each step is (sibling digest, position)
- Position.LEFT (0): sibling is hashed on the left
- Position.RIGHT (1): sibling is hashed on the right
- The unpaired last node of an odd level is its own sibling:
  its step carries its own digest with Position.RIGHT

Determinism Notes:
- Record ordering is defined upstream; this module never sorts
- Levels are plain lists, built and discarded one at a time
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Sequence

from core.crypto.hashing import (
    ZERO_DIGEST,
    TagHashCache,
    from_hex,
    hash_concat,
    tagged_hash,
)


# Empty tree sentinel: 32 zero bytes
EMPTY_TREE_ROOT: bytes = ZERO_DIGEST


class Position(IntEnum):
    """Side on which a proof step's sibling is combined."""
    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        hash: Sibling digest at this level (32 bytes)
        position: Side of the sibling relative to the running digest
    """
    hash: bytes
    position: Position

    def to_pair(self) -> tuple[str, int]:
        """Render as (hex digest, 0/1) for transport."""
        return self.hash.hex(), int(self.position)

    @classmethod
    def from_pair(cls, hash_hex: str, position: int) -> "ProofStep":
        """
        Parse a (hex digest, 0/1) transport pair.

        Raises:
            ValueError: If the hex is malformed or position is not 0/1
        """
        if not isinstance(hash_hex, str):
            raise ValueError(f"Proof hash must be a hex string, got {type(hash_hex).__name__}")
        if position not in (0, 1):
            raise ValueError(f"Proof position must be 0 or 1, got {position!r}")
        return cls(hash=from_hex(hash_hex), position=Position(position))


class ProofStatus(str, Enum):
    """Outcome of a proof request."""
    OK = "ok"
    SINGLE_LEAF = "single_leaf"
    EMPTY_TREE = "empty_tree"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass(frozen=True)
class MerkleProofResult:
    """
    An inclusion proof together with the reason it looks the way it does.

    ``steps`` is empty unless ``status`` is OK.
    """
    status: ProofStatus
    index: int
    steps: list[ProofStep] = field(default_factory=list)
    root: Optional[bytes] = None

    @property
    def found(self) -> bool:
        """True when the index addressed a record in the tree."""
        return self.status in (ProofStatus.OK, ProofStatus.SINGLE_LEAF)


def merkle_parent(
    branch_tag: str,
    left: bytes,
    right: bytes,
    *,
    cache: Optional[TagHashCache] = None,
) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Parent hash is deterministic: tagged_hash(branch_tag, left || right)
    """
    return hash_concat(branch_tag, left, right, cache=cache)


def hash_leaves(
    records: Sequence[bytes],
    leaf_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> list[bytes]:
    """Build level 0: the tagged leaf hash of every record, in order."""
    return [tagged_hash(leaf_tag, record, cache=cache) for record in records]


def next_level(
    level: Sequence[bytes],
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> list[bytes]:
    """
    Fold one level into the level above it.

    Example: [a, b, c] -> [parent(a, b), parent(c, c)]
    """
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(branch_tag, left, right, cache=cache))
    return parents


def compute_merkle_root(
    records: Sequence[bytes],
    leaf_tag: str,
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> bytes:
    """
    Compute the Merkle root of an ordered sequence of records.

    Algorithm:
    1. If empty: return 32 zero bytes
    2. Hash every record with the leaf tag (a single leaf is the root)
    3. Fold levels pairwise with the branch tag, duplicating the last
       node of any odd level, until one digest remains

    Args:
        records: Ordered record bytes; order is significant
        leaf_tag: Tag for leaf hashes
        branch_tag: Tag for branch hashes
        cache: Optional scoped tag cache

    Returns:
        32-byte Merkle root

    Example:
        >>> root = compute_merkle_root([b"a", b"b", b"c"], "Leaf", "Branch")
        >>> len(root)
        32
    """
    if len(records) == 0:
        return EMPTY_TREE_ROOT

    level = hash_leaves(records, leaf_tag, cache=cache)

    while len(level) > 1:
        level = next_level(level, branch_tag, cache=cache)

    return level[0]


def compute_merkle_proof(
    records: Sequence[bytes],
    leaf_index: int,
    leaf_tag: str,
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> list[ProofStep]:
    """
    Generate the inclusion proof for the record at ``leaf_index``.

    Empty records or an index outside [0, len(records)) yield an empty
    proof, the same as a single-record tree. Use build_merkle_proof()
    to tell these cases apart.

    Algorithm:
    1. Start at the target leaf index on level 0
    2. At each level:
       - Odd index: record the left neighbour with Position.LEFT
       - Even index with a right neighbour: record it with Position.RIGHT
       - Even index without a right neighbour: record the node itself
         with Position.RIGHT (it is paired with itself)
       - Fold the level and move up: index = index // 2
    3. Stop when the level has a single node

    Returns:
        Proof steps ordered from the leaf level up to the root
    """
    if len(records) == 0 or leaf_index < 0 or leaf_index >= len(records):
        return []

    level = hash_leaves(records, leaf_tag, cache=cache)
    index = leaf_index
    proof: list[ProofStep] = []

    while len(level) > 1:
        if index % 2 == 1:
            proof.append(ProofStep(hash=level[index - 1], position=Position.LEFT))
        else:
            # Last node of an odd level pairs with itself
            sibling_index = index + 1 if index + 1 < len(level) else index
            proof.append(ProofStep(hash=level[sibling_index], position=Position.RIGHT))

        level = next_level(level, branch_tag, cache=cache)
        index //= 2

    return proof


def build_merkle_proof(
    records: Sequence[bytes],
    leaf_index: int,
    leaf_tag: str,
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> MerkleProofResult:
    """
    Generate a proof along with a status explaining an empty result.

    Returns:
        MerkleProofResult; ``root`` is set whenever the tree is non-empty
    """
    if len(records) == 0:
        return MerkleProofResult(status=ProofStatus.EMPTY_TREE, index=leaf_index)

    root = compute_merkle_root(records, leaf_tag, branch_tag, cache=cache)

    if leaf_index < 0 or leaf_index >= len(records):
        return MerkleProofResult(
            status=ProofStatus.INDEX_OUT_OF_RANGE,
            index=leaf_index,
            root=root,
        )

    if len(records) == 1:
        return MerkleProofResult(status=ProofStatus.SINGLE_LEAF, index=leaf_index, root=root)

    steps = compute_merkle_proof(records, leaf_index, leaf_tag, branch_tag, cache=cache)
    return MerkleProofResult(status=ProofStatus.OK, index=leaf_index, steps=steps, root=root)


def verify_merkle_proof(
    leaf: bytes,
    proof: Sequence[ProofStep],
    leaf_tag: str,
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> bytes:
    """
    Recompute a root from a record and its proof.

    The caller compares the result against a published root; this
    function never fails and always returns a digest.

    Algorithm:
    1. Start with tagged_hash(leaf_tag, leaf)
    2. For each step (bottom-up):
       - Position.LEFT: current = parent(sibling, current)
       - Position.RIGHT: current = parent(current, sibling)

    Returns:
        32-byte recomputed root
    """
    current_hash = tagged_hash(leaf_tag, leaf, cache=cache)

    for step in proof:
        if step.position == Position.LEFT:
            current_hash = merkle_parent(branch_tag, step.hash, current_hash, cache=cache)
        else:
            current_hash = merkle_parent(branch_tag, current_hash, step.hash, cache=cache)

    return current_hash


def proof_matches_root(
    leaf: bytes,
    proof: Sequence[ProofStep],
    root: bytes,
    leaf_tag: str,
    branch_tag: str,
    *,
    cache: Optional[TagHashCache] = None,
) -> bool:
    """Check a proof against a published root in constant time."""
    computed = verify_merkle_proof(leaf, proof, leaf_tag, branch_tag, cache=cache)
    return hmac.compare_digest(computed, root)


def compute_tree_depth(num_records: int) -> int:
    """
    Number of folding steps from the leaf level to the root.

    ceil(log2(n)) for n > 1, and 0 for n <= 1. This is also the
    maximum proof length for a tree of that size.
    """
    depth = 0
    n = num_records
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "EMPTY_TREE_ROOT",
    "Position",
    "ProofStep",
    "ProofStatus",
    "MerkleProofResult",
    "merkle_parent",
    "hash_leaves",
    "next_level",
    "compute_merkle_root",
    "compute_merkle_proof",
    "build_merkle_proof",
    "verify_merkle_proof",
    "proof_matches_root",
    "compute_tree_depth",
]
