"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import copy
from argparse import Namespace

from core.config.runtime import RuntimeConfig
from core.reserve import AccountRegistry, ReserveService


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def effective_config(args: Namespace) -> RuntimeConfig:
    """Runtime config with command-line overrides applied."""
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    accounts = getattr(args, "accounts", None)
    if accounts:
        config = copy.deepcopy(config)
        config.accounts_file = accounts
    return config


def build_service(args: Namespace) -> ReserveService:
    """Create a ReserveService for the accounts and tags in effect."""
    config = effective_config(args)
    if config.accounts_file:
        registry = AccountRegistry.from_file(config.accounts_file)
    else:
        registry = AccountRegistry()
    return ReserveService(
        registry=registry,
        leaf_tag=config.tree.leaf_tag,
        branch_tag=config.tree.branch_tag,
    )
