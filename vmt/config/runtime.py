"""
Runtime Configuration

Defaults for tree construction (digest algorithm, lookup mode) and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from vmt.crypto.hashing import DigestAlgorithm, get_algorithm
from vmt.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "VMT_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigException(f"Invalid boolean for {key}: {value!r}", key=key)


@dataclass
class TreeConfig:
    """
    Configuration for building trees.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    algorithm: str = "sha256"
    use_index: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - VMT_ALGORITHM: Digest algorithm name (sha256, sha512, blake2b, ...)
        - VMT_USE_INDEX: Build the digest -> position index (true/false)
        - VMT_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - VMT_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ALGORITHM"):
            overrides["algorithm"] = os.getenv(f"{ENV_PREFIX}ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}USE_INDEX"):
            overrides["use_index"] = _parse_bool(
                os.getenv(f"{ENV_PREFIX}USE_INDEX"), f"{ENV_PREFIX}USE_INDEX"
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

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
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigException(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={"keys": unknown},
            )

        for key in ("algorithm", "log_level"):
            if key in data and not isinstance(data[key], str):
                raise ConfigException(
                    f"Invalid value for {key}: expected a string, got {data[key]!r}",
                    key=key,
                )
        if data.get("log_file") is not None and not isinstance(data["log_file"], str):
            raise ConfigException(
                f"Invalid value for log_file: expected a path, got {data['log_file']!r}",
                key="log_file",
            )

        config = cls(**data)
        config.use_index = _parse_bool(config.use_index, "use_index")
        return config

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        merged.update(overrides)
        return TreeConfig.from_dict(merged)

    def digest_algorithm(self) -> DigestAlgorithm:
        """
        Resolve the configured algorithm name.

        Raises:
            UnknownAlgorithmException: If the name is not registered
        """
        return get_algorithm(self.algorithm)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "algorithm": self.algorithm,
            "use_index": self.use_index,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TreeConfig]) -> None:
    """Set (or with None, reset) the default configuration."""
    global _default_config
    _default_config = config
