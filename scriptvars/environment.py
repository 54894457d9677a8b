"""Environment file loading for the read-only variable tier.

An env file is a JSON object of named environments::

    {
        "dev": {"host": "http://localhost:8000", "user": "dev"},
        "prod": {"host": "https://api.example.com"}
    }

One environment is selected per session and exposed to the resolver as a
read-only mapping.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from scriptvars.core.errors import EnvironmentFileError
from scriptvars.core.logging import ResolverLogger

# Default filename for named environments
ENV_FILENAME = "http-client.env.json"

EMPTY_ENV_FILE = "{}"


def read_env_file(
    path: str | Path, create_missing: bool = True, logger: ResolverLogger | None = None
) -> dict[str, Any]:
    """Read every named environment from *path*.

    Args:
        path: Env file path
        create_missing: Write an empty env file when none exists
        logger: Optional ResolverLogger

    Returns:
        dict: Mapping of environment name to its variables

    Raises:
        EnvironmentFileError: If the file cannot be read or created, is not
                              valid JSON, or its top level is not an object
    """
    env_path = Path(path)
    if not env_path.exists():
        if create_missing:
            try:
                env_path.parent.mkdir(parents=True, exist_ok=True)
                env_path.write_text(EMPTY_ENV_FILE, encoding="utf-8")
            except OSError as e:
                raise EnvironmentFileError(env_path, str(e)) from e
            if logger is not None:
                logger.log_environment_created(str(env_path))
        return {}

    try:
        content = env_path.read_text(encoding="utf-8")
    except OSError as e:
        raise EnvironmentFileError(env_path, str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise EnvironmentFileError(env_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise EnvironmentFileError(env_path, "top level must be a JSON object")
    return data


def load_environment(
    path: str | Path = ENV_FILENAME,
    env_name: str = "dev",
    create_missing: bool = True,
    logger: ResolverLogger | None = None,
) -> Mapping[str, Any]:
    """Load the variables of one named environment.

    An env file without *env_name* yields an empty environment.

    Args:
        path: Env file path
        env_name: Environment to select
        create_missing: Write an empty env file when none exists
        logger: Optional ResolverLogger

    Returns:
        Mapping: Read-only view of the selected environment

    Raises:
        EnvironmentFileError: If the file is unreadable or malformed, or the
                              selected environment is not a JSON object
    """
    environments = read_env_file(path, create_missing=create_missing, logger=logger)
    selected = environments.get(env_name, {})
    if not isinstance(selected, dict):
        raise EnvironmentFileError(path, f"environment '{env_name}' must be a JSON object")

    if logger is not None:
        logger.log_environment_loaded(str(path), env_name, len(selected))
    return MappingProxyType(dict(selected))
