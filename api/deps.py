"""
API Dependencies

Factories for the runtime configuration and the reserve service.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config.runtime import RuntimeConfig, get_default_config
from core.reserve import AccountRegistry, ReserveService


logger = logging.getLogger(__name__)


_service: Optional[ReserveService] = None


def build_reserve_service(config: RuntimeConfig) -> ReserveService:
    """
    Create a ReserveService from configuration.

    Uses the accounts file when one is configured, otherwise the
    built-in default accounts.
    """
    if config.accounts_file:
        registry = AccountRegistry.from_file(config.accounts_file)
    else:
        registry = AccountRegistry()

    logger.info(
        "Reserve service ready: %d accounts, leaf_tag=%s, branch_tag=%s",
        len(registry), config.tree.leaf_tag, config.tree.branch_tag,
    )
    return ReserveService(
        registry=registry,
        leaf_tag=config.tree.leaf_tag,
        branch_tag=config.tree.branch_tag,
    )


def get_reserve_service() -> ReserveService:
    """Get the process-wide reserve service, building it on first use."""
    global _service
    if _service is None:
        _service = build_reserve_service(get_default_config())
    return _service


def set_reserve_service(service: Optional[ReserveService]) -> None:
    """Replace (or with None, reset) the process-wide reserve service."""
    global _service
    _service = service
