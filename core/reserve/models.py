"""
Reserve Models

Pydantic models for accounts and per-account reserve proofs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """A single account in the reserve snapshot."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(..., description="Unique account identifier")
    balance: int = Field(..., description="Account balance in base units")


class ReserveProof(BaseModel):
    """
    Inclusion proof for one account, in transport form.

    ``proof`` holds (hex digest, position) pairs from the leaf level up,
    position 0 meaning the sibling is hashed on the left and 1 on the right.
    """

    model_config = ConfigDict(extra="forbid")

    balance: int = Field(..., description="The account's balance")
    proof: list[tuple[str, int]] = Field(
        default_factory=list,
        description="Merkle proof nodes as (hash hex, position bit) pairs",
    )


__all__ = ["Account", "ReserveProof"]
