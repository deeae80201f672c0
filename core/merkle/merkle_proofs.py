"""
Merkle Proofs Convenience Wrappers
Tag-bound class interfaces around the functions in merkle_tree.py.

This module provides:
- MerkleProver: Compute roots and generate proofs for one tag pair
- MerkleVerifier: Recompute and check roots for one tag pair
"""
from __future__ import annotations

from typing import Optional, Sequence

from core.crypto.hashing import TagHashCache
from core.merkle.merkle_tree import (
    MerkleProofResult,
    ProofStep,
    build_merkle_proof,
    compute_merkle_proof,
    compute_merkle_root,
    proof_matches_root,
    verify_merkle_proof,
)


class MerkleProver:
    """
    Generates roots and proofs for a fixed (leaf_tag, branch_tag) pair.

    Example:
        >>> prover = MerkleProver("Leaf", "Branch")
        >>> steps = prover.prove([b"a", b"b", b"c"], index=1)
        >>> len(steps)
        2
    """

    def __init__(
        self,
        leaf_tag: str,
        branch_tag: str,
        cache: Optional[TagHashCache] = None,
    ) -> None:
        self.leaf_tag = leaf_tag
        self.branch_tag = branch_tag
        self.cache = cache

    def compute_root(self, records: Sequence[bytes]) -> bytes:
        """Compute the 32-byte Merkle root for a sequence of records."""
        return compute_merkle_root(
            records, self.leaf_tag, self.branch_tag, cache=self.cache
        )

    def prove(self, records: Sequence[bytes], index: int) -> list[ProofStep]:
        """
        Generate the proof for the record at ``index``.

        Returns an empty list for a bad index, an empty tree, or a
        single-record tree.
        """
        return compute_merkle_proof(
            records, index, self.leaf_tag, self.branch_tag, cache=self.cache
        )

    def prove_with_status(self, records: Sequence[bytes], index: int) -> MerkleProofResult:
        """Generate a proof wrapped with its ProofStatus and root."""
        return build_merkle_proof(
            records, index, self.leaf_tag, self.branch_tag, cache=self.cache
        )


class MerkleVerifier:
    """
    Verifies proofs for a fixed (leaf_tag, branch_tag) pair.

    Example:
        >>> verifier = MerkleVerifier("Leaf", "Branch")
        >>> verifier.verify(b"b", steps, root)
        True
    """

    def __init__(
        self,
        leaf_tag: str,
        branch_tag: str,
        cache: Optional[TagHashCache] = None,
    ) -> None:
        self.leaf_tag = leaf_tag
        self.branch_tag = branch_tag
        self.cache = cache

    def recompute_root(self, leaf: bytes, proof: Sequence[ProofStep]) -> bytes:
        """Recompute the root implied by ``leaf`` and ``proof``."""
        return verify_merkle_proof(
            leaf, proof, self.leaf_tag, self.branch_tag, cache=self.cache
        )

    def verify(self, leaf: bytes, proof: Sequence[ProofStep], root: bytes) -> bool:
        """
        Check that ``leaf`` is included under ``root``.

        Returns:
            True if the recomputed root equals ``root``
        """
        return proof_matches_root(
            leaf, proof, root, self.leaf_tag, self.branch_tag, cache=self.cache
        )

    def verify_pairs(
        self,
        leaf: bytes,
        pairs: Sequence[Sequence],
        root: bytes,
    ) -> bool:
        """
        Verify a proof given in transport form: [[hex, position], ...].

        Raises:
            ValueError: If a pair is malformed
        """
        steps = [ProofStep.from_pair(hash_hex, position) for hash_hex, position in pairs]
        return self.verify(leaf, steps, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
