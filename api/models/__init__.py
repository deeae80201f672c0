"""API request and response models."""

from api.models.requests import VerifyProofRequest
from api.models.responses import (
    HealthResponse,
    MerkleRootResponse,
    MerkleProofResponse,
    VerifyProofResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "VerifyProofRequest",
    "HealthResponse",
    "MerkleRootResponse",
    "MerkleProofResponse",
    "VerifyProofResponse",
    "ErrorDetail",
    "ErrorResponse",
]
