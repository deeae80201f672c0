"""
Reserve Routes

Publish the reserve Merkle root and per-account inclusion proofs.

- GET /merkle-root
- GET /merkle-proof/{user_id}
- POST /verify-proof
"""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter

from api.deps import get_reserve_service
from api.errors import InternalError, InvalidRequestError, NotFoundError
from api.models.requests import VerifyProofRequest
from api.models.responses import (
    MerkleProofResponse,
    MerkleRootResponse,
    VerifyProofResponse,
)
from core.reserve import Account


logger = logging.getLogger(__name__)

router = APIRouter(tags=["reserve"])

_USER_ID_PATTERN = re.compile(r"[0-9]+")


def parse_user_id(raw: str) -> int:
    """
    Validate a user id path segment.

    Must be ASCII digits only and strictly positive.

    Raises:
        InvalidRequestError: If the value is not a positive integer
    """
    if not _USER_ID_PATTERN.fullmatch(raw):
        raise InvalidRequestError("Invalid user ID", details={"user_id": raw})

    user_id = int(raw)
    if user_id <= 0:
        raise InvalidRequestError("Invalid user ID", details={"user_id": raw})

    return user_id


@router.get("/merkle-root", response_model=MerkleRootResponse)
def merkle_root() -> MerkleRootResponse:
    """Return the Merkle root over all accounts as lowercase hex."""
    service = get_reserve_service()
    try:
        root = service.compute_root_hex()
    except Exception as e:
        logger.exception("Error computing Merkle root")
        raise InternalError("Failed to compute Merkle root") from e

    return MerkleRootResponse(merkle_root=root)


@router.get("/merkle-proof/{user_id}", response_model=MerkleProofResponse)
def merkle_proof(user_id: str) -> MerkleProofResponse:
    """
    Return the inclusion proof for one account.

    Each proof node is [hash hex, position]: position 0 means the
    sibling is hashed on the left, 1 on the right.
    """
    account_id = parse_user_id(user_id)
    service = get_reserve_service()

    try:
        proof = service.generate_proof(account_id)
    except Exception as e:
        logger.exception("Error generating Merkle proof")
        raise InternalError("Failed to generate Merkle proof") from e

    if proof is None:
        raise NotFoundError("User not found", details={"user_id": account_id})

    return MerkleProofResponse(balance=proof.balance, proof=proof.proof)


@router.post("/verify-proof", response_model=VerifyProofResponse)
def verify_proof(request: VerifyProofRequest) -> VerifyProofResponse:
    """
    Recompute the root implied by an account and its proof.

    The result is compared with ``root`` when given, otherwise with the
    currently published root.
    """
    service = get_reserve_service()
    account = Account(id=request.id, balance=request.balance)

    # InvalidProofError is mapped to 400 by reserve_error_handler
    computed, expected, ok = service.check_proof(account, request.proof, request.root)

    return VerifyProofResponse(ok=ok, computed_root=computed, expected_root=expected)
