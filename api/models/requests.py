"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class VerifyProofRequest(BaseModel):
    """Request body for POST /verify-proof endpoint."""

    id: int = Field(..., description="Account id")
    balance: int = Field(..., description="Claimed balance")
    proof: list[list[Any]] = Field(
        default_factory=list,
        description="Proof nodes as [hash hex, position] pairs",
    )
    root: Optional[str] = Field(
        default=None,
        description="Root to check against (defaults to the current root)",
    )
