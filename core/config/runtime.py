"""
Runtime Configuration

Central configuration for the reserve service, tree tags, and server setup.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


# Environment variable prefix
ENV_PREFIX = "POR_"

DEFAULT_LEAF_TAG = "ProofOfReserve_Leaf"
DEFAULT_BRANCH_TAG = "ProofOfReserve_Branch"


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class TreeConfig:
    """Domain-separation tags for the reserve Merkle tree."""
    leaf_tag: str = DEFAULT_LEAF_TAG
    branch_tag: str = DEFAULT_BRANCH_TAG

    def __post_init__(self):
        if self.leaf_tag == self.branch_tag:
            logger.warning(
                "Leaf and branch tags are identical (%r); leaf and branch "
                "digests are not domain-separated", self.leaf_tag,
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the proof of reserve service.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    accounts_file: Optional[str] = None
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - POR_HOST: Bind address for the HTTP server
        - POR_PORT: Port for the HTTP server (PORT is also honoured)
        - POR_LOG_LEVEL: Log level name
        - POR_LEAF_TAG: Leaf hash tag
        - POR_BRANCH_TAG: Branch hash tag
        - POR_ACCOUNTS_FILE: JSON/YAML file with the account list
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        port = os.getenv(f"{ENV_PREFIX}PORT") or os.getenv("PORT")
        if port:
            overrides.setdefault("server", {})["port"] = int(port)

        if os.getenv(f"{ENV_PREFIX}LEAF_TAG"):
            overrides.setdefault("tree", {})["leaf_tag"] = os.getenv(f"{ENV_PREFIX}LEAF_TAG")
        if os.getenv(f"{ENV_PREFIX}BRANCH_TAG"):
            overrides.setdefault("tree", {})["branch_tag"] = os.getenv(f"{ENV_PREFIX}BRANCH_TAG")

        if os.getenv(f"{ENV_PREFIX}ACCOUNTS_FILE"):
            overrides["accounts_file"] = os.getenv(f"{ENV_PREFIX}ACCOUNTS_FILE")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML or JSON depending on the file extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        server_data = data.get("server", {})
        tree_data = data.get("tree", {})

        server = ServerConfig(**server_data) if server_data else ServerConfig()
        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()

        return cls(
            server=server,
            tree=tree,
            accounts_file=data.get("accounts_file"),
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "server" in overrides:
            for key, value in overrides["server"].items():
                setattr(new_config.server, key, value)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)

        if "accounts_file" in overrides:
            new_config.accounts_file = overrides["accounts_file"]
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "tree": {
                "leaf_tag": self.tree.leaf_tag,
                "branch_tag": self.tree.branch_tag,
            },
            "accounts_file": self.accounts_file,
            "log_level": self.log_level,
            "extra": self.extra,
        }


def config_search_paths() -> list[Path]:
    """Config file locations, in priority order."""
    return [
        Path.cwd() / "por.json",
        Path.cwd() / ".por.json",
        Path.home() / ".config" / "por" / "config.json",
    ]


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    If ``path`` is given it must exist; otherwise the first existing file
    from config_search_paths() is used, falling back to defaults.
    Environment variables ALWAYS override config file values.
    """
    if path is not None:
        return RuntimeConfig.from_file(path).with_env_overrides()

    for candidate in config_search_paths():
        if candidate.exists():
            return RuntimeConfig.from_file(candidate).with_env_overrides()

    return RuntimeConfig().with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_runtime_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
