"""
Reserve Service

Publishes the Merkle root over the account registry and produces
per-account inclusion proofs in transport form.

Usage:
    from core.reserve import ReserveService

    service = ReserveService()
    root_hex = service.compute_root_hex()
    proof = service.generate_proof(1)   # ReserveProof or None
"""

from __future__ import annotations

import hmac
import logging
from typing import Any, Optional, Sequence

from core.config.runtime import DEFAULT_BRANCH_TAG, DEFAULT_LEAF_TAG
from core.crypto.hashing import from_hex, to_hex
from core.merkle import MerkleProver, MerkleVerifier, ProofStep
from core.reserve.errors import InvalidProofError
from core.reserve.models import Account, ReserveProof
from core.reserve.registry import AccountRegistry, serialize_account


logger = logging.getLogger(__name__)


RESERVE_LEAF_TAG = DEFAULT_LEAF_TAG
RESERVE_BRANCH_TAG = DEFAULT_BRANCH_TAG


def decode_proof(pairs: Sequence[Sequence[Any]]) -> list[ProofStep]:
    """
    Decode transport pairs [[hex, position], ...] into ProofSteps.

    Raises:
        InvalidProofError: If any pair is malformed
    """
    steps: list[ProofStep] = []
    for i, pair in enumerate(pairs):
        try:
            hash_hex, position = pair
            steps.append(ProofStep.from_pair(hash_hex, position))
        except (TypeError, ValueError) as e:
            raise InvalidProofError(
                f"Invalid proof node at position {i}: {e}",
                details={"node": i},
            ) from e
    return steps


class ReserveService:
    """Merkle commitments over an AccountRegistry."""

    def __init__(
        self,
        registry: Optional[AccountRegistry] = None,
        leaf_tag: str = RESERVE_LEAF_TAG,
        branch_tag: str = RESERVE_BRANCH_TAG,
    ):
        self.registry = registry if registry is not None else AccountRegistry()
        self.prover = MerkleProver(leaf_tag, branch_tag)
        self.verifier = MerkleVerifier(leaf_tag, branch_tag)

    def compute_root(self) -> bytes:
        return self.prover.compute_root(self.registry.records())

    def compute_root_hex(self) -> str:
        """Lowercase hex of the current reserve root."""
        return to_hex(self.compute_root())

    def generate_proof(self, account_id: Any) -> Optional[ReserveProof]:
        """
        Build the inclusion proof for an account.

        Unknown ids (including non-positive or non-integer values) return
        None. The lookup happens before the engine is called, so an empty
        ``proof`` in the result always means a single-account registry.
        """
        index = self.registry.index_of(account_id)
        if index is None:
            logger.debug("Proof requested for unknown account %r", account_id)
            return None

        account = self.registry.sorted_accounts()[index]
        steps = self.prover.prove(self.registry.records(), index)

        return ReserveProof(
            balance=account.balance,
            proof=[step.to_pair() for step in steps],
        )

    def check_proof(
        self,
        account: Account,
        proof: Sequence[Sequence[Any]],
        root_hex: Optional[str] = None,
    ) -> tuple[str, str, bool]:
        """
        Recompute the root from an account and its proof, once, and
        compare it with ``root_hex`` (the current root by default).

        Returns:
            (computed root hex, expected root hex, match)

        Raises:
            InvalidProofError: If the proof or root is not valid hex
        """
        steps = decode_proof(proof)
        if root_hex is None:
            expected = self.compute_root()
        else:
            try:
                expected = from_hex(root_hex)
            except ValueError as e:
                raise InvalidProofError(f"Invalid root: {e}") from e

        computed = self.verifier.recompute_root(serialize_account(account), steps)
        return to_hex(computed), to_hex(expected), hmac.compare_digest(computed, expected)

    def verify_proof(
        self,
        account: Account,
        proof: Sequence[Sequence[Any]],
        root_hex: Optional[str] = None,
    ) -> bool:
        """Check an account's proof against a root (the current one by default)."""
        return self.check_proof(account, proof, root_hex)[2]

    def recompute_root_hex(self, account: Account, proof: Sequence[Sequence[Any]]) -> str:
        """Root hex implied by an account and its proof."""
        steps = decode_proof(proof)
        return to_hex(self.verifier.recompute_root(serialize_account(account), steps))


_default_service: Optional[ReserveService] = None


def get_default_service() -> ReserveService:
    """Service over the built-in default accounts."""
    global _default_service
    if _default_service is None:
        _default_service = ReserveService()
    return _default_service


def compute_reserve_root() -> str:
    """Hex root of the default account registry."""
    return get_default_service().compute_root_hex()


def generate_reserve_proof(account_id: Any) -> Optional[ReserveProof]:
    """Proof for one account of the default registry, or None if unknown."""
    return get_default_service().generate_proof(account_id)


__all__ = [
    "RESERVE_LEAF_TAG",
    "RESERVE_BRANCH_TAG",
    "decode_proof",
    "ReserveService",
    "get_default_service",
    "compute_reserve_root",
    "generate_reserve_proof",
]
