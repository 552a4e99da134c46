"""
Runtime Configuration

Configuration for hash primitive selection, logging and output format.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkletree.crypto.hashing import HashFunc, get_hash_func
from merkletree.schemas.errors import ConfigurationError

load_dotenv()

# Environment variable prefix
ENV_PREFIX = "MERKLETREE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_OUTPUT_FORMATS = ("human", "json")


@dataclass
class TreeConfig:
    """
    Runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = "sha256"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_format: str = "human"  # "human" or "json"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                details={"allowed": list(_LOG_LEVELS)},
            )
        if self.output_format not in _OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format: {self.output_format}",
                details={"allowed": list(_OUTPUT_FORMATS)},
            )

    def hash_func(self) -> HashFunc:
        """Resolve the configured hash primitive."""
        return get_hash_func(self.hash_algorithm)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLETREE_HASH_ALGORITHM: sha256, sha512, sha3_256, blake2b
        - MERKLETREE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
        - MERKLETREE_LOG_FILE: Path of an additional log file
        - MERKLETREE_OUTPUT_FORMAT: human or json
        """
        overrides: dict[str, Any] = {}
        for key in ("hash_algorithm", "log_level", "log_file", "output_format"):
            value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if value:
                overrides[key] = value
        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        return cls(
            hash_algorithm=data.get("hash_algorithm", "sha256"),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            output_format=data.get("output_format", "human"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict()
        data.update(overrides)
        data["extra"] = copy.deepcopy(self.extra)
        return self.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "output_format": self.output_format,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default configuration (loaded from the environment once)."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config
