"""
Account Registry

Holds the reserve snapshot and supplies records to the Merkle engine
in a stable order (ascending account id).

Serialization Rule (Hard Contract):
    record = "(<id>,<balance>)".encode("utf-8")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

import yaml
from pydantic import ValidationError

from core.reserve.errors import AccountsFileError, DuplicateAccountError
from core.reserve.models import Account


logger = logging.getLogger(__name__)


DEFAULT_ACCOUNTS: tuple[Account, ...] = (
    Account(id=1, balance=1111),
    Account(id=2, balance=2222),
    Account(id=3, balance=3333),
    Account(id=4, balance=4444),
    Account(id=5, balance=5555),
    Account(id=6, balance=6666),
    Account(id=7, balance=7777),
    Account(id=8, balance=8888),
)


def serialize_account(account: Account) -> bytes:
    """
    Render an account as the record bytes committed in the tree.

    Example:
        >>> serialize_account(Account(id=10, balance=100))
        b'(10,100)'
    """
    return f"({account.id},{account.balance})".encode("utf-8")


class AccountRegistry:
    """
    Ordered, read-only collection of accounts.

    Accounts are kept sorted by id regardless of input order, since the
    Merkle root depends on record order.
    """

    def __init__(self, accounts: Iterable[Account] = DEFAULT_ACCOUNTS):
        by_id: dict[int, Account] = {}
        for account in accounts:
            if account.id in by_id:
                raise DuplicateAccountError(account.id)
            by_id[account.id] = account

        self._accounts: list[Account] = sorted(by_id.values(), key=lambda a: a.id)
        self._index: dict[int, int] = {a.id: i for i, a in enumerate(self._accounts)}

    @classmethod
    def from_records(cls, data: Iterable[dict[str, Any]]) -> "AccountRegistry":
        """Build a registry from plain ``{"id": ..., "balance": ...}`` dicts."""
        try:
            accounts = [Account.model_validate(item) for item in data]
        except ValidationError as e:
            raise AccountsFileError(
                "Invalid account entry",
                details={"errors": e.errors(include_url=False)},
            ) from e
        return cls(accounts)

    @classmethod
    def from_file(cls, path: str | Path) -> "AccountRegistry":
        """
        Load accounts from a JSON or YAML file.

        The file holds either a list of accounts or an object with an
        ``accounts`` list.

        Raises:
            AccountsFileError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.exists():
            raise AccountsFileError(f"Accounts file not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise AccountsFileError(f"Failed to parse accounts file {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("accounts")
        if not isinstance(data, list):
            raise AccountsFileError(
                f"Accounts file {path} must contain a list of accounts",
            )

        registry = cls.from_records(data)
        logger.info("Loaded %d accounts from %s", len(registry), path)
        return registry

    def sorted_accounts(self) -> list[Account]:
        """All accounts, ascending by id."""
        return list(self._accounts)

    def records(self) -> list[bytes]:
        """Serialized records in tree order."""
        return [serialize_account(a) for a in self._accounts]

    def index_of(self, account_id: Any) -> Optional[int]:
        """Leaf index of an account, or None if it is not registered."""
        if isinstance(account_id, bool) or not isinstance(account_id, int):
            return None
        return self._index.get(account_id)

    def get(self, account_id: Any) -> Optional[Account]:
        index = self.index_of(account_id)
        return None if index is None else self._accounts[index]

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts))

    def __contains__(self, account_id: object) -> bool:
        return self.index_of(account_id) is not None


__all__ = [
    "DEFAULT_ACCOUNTS",
    "serialize_account",
    "AccountRegistry",
]
