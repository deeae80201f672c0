"""
Merkle Tree and Commitments
Tagged Merkle tree construction + proof generation/verification.

This module provides:
- ProofStep / Position: One level of an inclusion proof
- compute_merkle_root: Compute root from ordered records
- compute_merkle_proof: Generate proof for a specific record
- verify_merkle_proof: Recompute a root from a record and its proof
- build_merkle_proof: Proof plus a status for empty/bad-index cases

Commitment Rules:
1. Leaf hashing: tagged_hash(leaf_tag, record)
2. Branch hashing: tagged_hash(branch_tag, left || right)
3. Padding: Pair the last node with itself if odd number at any level
4. Empty tree: 32 zero bytes
5. Single record: root = leaf hash

Usage:
    from core.merkle import compute_merkle_root, compute_merkle_proof, verify_merkle_proof

    records = [b"(1,1111)", b"(2,2222)", b"(3,3333)"]
    root = compute_merkle_root(records, "Leaf", "Branch")
    proof = compute_merkle_proof(records, 2, "Leaf", "Branch")
    assert verify_merkle_proof(records[2], proof, "Leaf", "Branch") == root
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    Position,
    ProofStep,
    ProofStatus,
    MerkleProofResult,
    merkle_parent,
    hash_leaves,
    next_level,
    compute_merkle_root,
    compute_merkle_proof,
    build_merkle_proof,
    verify_merkle_proof,
    proof_matches_root,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "EMPTY_TREE_ROOT",
    "Position",
    "ProofStep",
    "ProofStatus",
    "MerkleProofResult",
    # Core functions
    "merkle_parent",
    "hash_leaves",
    "next_level",
    "compute_merkle_root",
    "compute_merkle_proof",
    "build_merkle_proof",
    "verify_merkle_proof",
    "proof_matches_root",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
