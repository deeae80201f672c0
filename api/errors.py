"""
API Error Handling

Maps reserve-layer failures and request problems onto the structured
``{ok: false, error: {code, message, details}}`` body.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.reserve.errors import ErrorCodes, ReserveError


logger = logging.getLogger(__name__)


# HTTP status for each reserve error code; unknown codes are server errors
RESERVE_ERROR_STATUS: dict[str, int] = {
    ErrorCodes.PROOF_ENCODING_INVALID: 400,
    ErrorCodes.DUPLICATE_ACCOUNT: 500,
    ErrorCodes.ACCOUNTS_FILE_INVALID: 500,
}


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Serialized ErrorResponse."""
    return ErrorResponse(
        ok=False,
        error=ErrorDetail(code=code, message=message, details=details or {}),
    ).model_dump()


class APIError(Exception):
    """Base API error carrying its HTTP status."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_reserve_error(cls, exc: ReserveError) -> "APIError":
        status_code = RESERVE_ERROR_STATUS.get(exc.code, 500)
        if status_code == 400:
            return InvalidRequestError(exc.message, details=exc.details)
        return cls(exc.code, exc.message, status_code=status_code, details=exc.details)


class InvalidRequestError(APIError):
    """Malformed user id, proof node or root."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__("INVALID_REQUEST", message, status_code=400, details=details)


class NotFoundError(APIError):
    """No account with the requested id."""

    def __init__(self, message: str = "Not found", details: dict[str, Any] | None = None):
        super().__init__("NOT_FOUND", message, status_code=404, details=details)


class InternalError(APIError):
    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__("INTERNAL_ERROR", message, status_code=500, details=details)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.details),
    )


async def reserve_error_handler(request: Request, exc: ReserveError) -> JSONResponse:
    """Handle reserve-layer exceptions that escaped a route."""
    api_exc = APIError.from_reserve_error(exc)
    if api_exc.status_code >= 500:
        logger.error("Reserve error on %s: %s", request.url.path, exc)
    return await api_error_handler(request, api_exc)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            {"type": type(exc).__name__},
        ),
    )
