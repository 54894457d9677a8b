"""Configuration loading for variable sessions.

Provides default settings and TOML-based configuration loading for
locating the env file and snapshot file and choosing the environment.
"""

from __future__ import annotations

import os
import tomllib

from pydantic import ValidationError

from scriptvars.core.errors import ConfigValidationError
from scriptvars.core.models import ResolverConfig

DEFAULT_CONFIG = {
    # Named environments, one selected per session
    "env_file": "http-client.env.json",
    "env_name": "dev",

    # Overlay store persisted between runs
    "snapshot_file": ".snapshot.json",
    "persist_snapshot": True,

    "create_missing_env_file": True,
    "thread_safe": False,
}


def load_config(path: str = "config/scriptvars.toml") -> ResolverConfig:
    """Load and merge user configuration with defaults.

    Performs a shallow merge of user-provided TOML settings with DEFAULT_CONFIG
    and returns a validated ResolverConfig.

    Args:
        path: Path to the TOML file. If file doesn't exist, returns
              ResolverConfig with defaults.

    Returns:
        ResolverConfig: Validated configuration.

    Raises:
        ConfigValidationError: If the configuration contains invalid values
        tomllib.TOMLDecodeError: If TOML file is malformed
        OSError: If file exists but cannot be read
    """
    if not os.path.exists(path):
        return ResolverConfig(**DEFAULT_CONFIG)  # type: ignore[arg-type]

    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = DEFAULT_CONFIG | data

    try:
        return ResolverConfig(**config)  # type: ignore[arg-type]
    except ConfigValidationError:
        raise
    except ValidationError as e:
        raise ConfigValidationError(f"Config validation failed: {e}") from e
