"""
Test fixtures package for proof of reserve tests.

Factory functions for records, accounts and registries.

Usage:
    from fixtures import make_records, make_registry

    def test_something():
        records = make_records(5)
        registry = make_registry([(1, 100), (2, 200)])
"""

from .reserve_fixtures import (
    LEAF_TAG,
    BRANCH_TAG,
    make_records,
    make_account,
    make_registry,
    write_accounts_file,
)

__all__ = [
    "LEAF_TAG",
    "BRANCH_TAG",
    "make_records",
    "make_account",
    "make_registry",
    "write_accounts_file",
]
