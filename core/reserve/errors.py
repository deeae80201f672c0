"""
Reserve Errors

Exceptions raised by the account registry and reserve service.
The Merkle engine itself never raises; these cover the layers around it.
"""

from typing import Any


class ErrorCodes:
    """Stable machine-readable error codes."""

    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    ACCOUNTS_FILE_INVALID = "ACCOUNTS_FILE_INVALID"
    PROOF_ENCODING_INVALID = "PROOF_ENCODING_INVALID"


class ReserveError(Exception):
    """Base exception for reserve-layer failures."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DuplicateAccountError(ReserveError):
    """Two accounts share the same id."""

    def __init__(self, account_id: int):
        super().__init__(
            code=ErrorCodes.DUPLICATE_ACCOUNT,
            message=f"Duplicate account id: {account_id}",
            details={"account_id": account_id},
        )


class AccountsFileError(ReserveError):
    """An accounts file is missing or malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.ACCOUNTS_FILE_INVALID,
            message=message,
            details=details,
        )


class InvalidProofError(ReserveError):
    """A proof in transport form could not be decoded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.PROOF_ENCODING_INVALID,
            message=message,
            details=details,
        )
