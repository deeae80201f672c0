"""
FastAPI Application

Builds the Proof of Reserve API.

Usage:
    uvicorn api.app:app --reload

    # Or through the CLI
    por serve --port 3000
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, reserve
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    reserve_error_handler,
)
from core.config.runtime import get_default_config
from core.reserve import ReserveError


# Level comes from POR_LOG_LEVEL, then por.json, then INFO
logging.basicConfig(
    level=getattr(logging, get_default_config().log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


API_DESCRIPTION = """
Publishes a tagged Merkle root over account balances and per-account
inclusion proofs.

## Endpoints

- **GET /merkle-root** - Current Merkle root (lowercase hex)
- **GET /merkle-proof/{user_id}** - Balance and inclusion proof for one account
- **POST /verify-proof** - Recompute the root from an account and proof
- **GET /health** - Health check

## Proof Format

Each proof node is `[hash_hex, position]`, from the leaf level up.
Position `0` means the sibling is hashed on the left, `1` on the right.
Leaves are `tagged_hash("ProofOfReserve_Leaf", "(id,balance)")`.
"""


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Proof of Reserve API",
        description=API_DESCRIPTION,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Proofs are public; any origin may fetch them
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ReserveError, reserve_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(reserve.router)

    logger.debug("Proof of Reserve API created")
    return app


app = create_app()
