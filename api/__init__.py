"""
Proof of Reserve API (FastAPI)

HTTP API over the reserve service:
- GET /merkle-root - Published Merkle root
- GET /merkle-proof/{user_id} - Inclusion proof for one account
- POST /verify-proof - Recompute and check a root from a proof
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
