"""
Proof of Reserve

Account registry and the service that commits to it with a tagged Merkle tree.
"""
from .errors import (
    ReserveError,
    DuplicateAccountError,
    AccountsFileError,
    InvalidProofError,
)
from .models import Account, ReserveProof
from .registry import DEFAULT_ACCOUNTS, AccountRegistry, serialize_account
from .service import (
    RESERVE_LEAF_TAG,
    RESERVE_BRANCH_TAG,
    ReserveService,
    decode_proof,
    get_default_service,
    compute_reserve_root,
    generate_reserve_proof,
)

__all__ = [
    "ReserveError",
    "DuplicateAccountError",
    "AccountsFileError",
    "InvalidProofError",
    "Account",
    "ReserveProof",
    "DEFAULT_ACCOUNTS",
    "AccountRegistry",
    "serialize_account",
    "RESERVE_LEAF_TAG",
    "RESERVE_BRANCH_TAG",
    "ReserveService",
    "decode_proof",
    "get_default_service",
    "compute_reserve_root",
    "generate_reserve_proof",
]
