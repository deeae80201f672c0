"""
Runtime Configuration Module

Provides configuration loading and management for the proof of reserve service.
"""

from .runtime import (
    DEFAULT_BRANCH_TAG,
    DEFAULT_LEAF_TAG,
    RuntimeConfig,
    ServerConfig,
    TreeConfig,
    get_default_config,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_BRANCH_TAG",
    "DEFAULT_LEAF_TAG",
    "RuntimeConfig",
    "ServerConfig",
    "TreeConfig",
    "get_default_config",
    "load_runtime_config",
    "set_default_config",
]
