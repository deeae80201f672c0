"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    status: str = "ok"
    service: str = "proof-of-reserve-api"
    version: str = "v1"
    uptime: float = Field(default=0.0, description="Seconds since the app started")


class MerkleRootResponse(BaseModel):
    """Response for GET /merkle-root endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    merkle_root: str = Field(
        ...,
        alias="merkleRoot",
        description="Lowercase hex Merkle root over all accounts",
    )


class MerkleProofResponse(BaseModel):
    """Response for GET /merkle-proof/{user_id} endpoint."""

    balance: int = Field(..., description="The account's balance")
    proof: list[tuple[str, int]] = Field(
        default_factory=list,
        description="Proof nodes as (hash hex, position) pairs, leaf level first",
    )


class VerifyProofResponse(BaseModel):
    """Response for POST /verify-proof endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = Field(..., description="Whether the computed root matches the expected root")
    computed_root: str = Field(..., alias="computedRoot")
    expected_root: str = Field(..., alias="expectedRoot")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
