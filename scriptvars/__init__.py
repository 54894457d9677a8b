"""scriptvars: snapshot-over-environment variable resolution for request scripts.

Public API:
    VariableResolver, NOT_FOUND      two-tier get/set
    VariableSession                  env file + snapshot file lifecycle
    Interpolator                     ``{{ name }}`` placeholder rendering
    assert_equals, check_equals      typed equality assertions
    load_config, ResolverConfig      configuration
"""

from __future__ import annotations

from scriptvars.assertions import assert_equals, check_equals
from scriptvars.config import DEFAULT_CONFIG, load_config
from scriptvars.core import (
    AssertionFailure,
    AssertionResult,
    ConfigValidationError,
    EnvironmentFileError,
    Resolution,
    ResolverConfig,
    ScriptVarsError,
    SessionNotOpenError,
    SnapshotFileError,
    UndefinedVariableError,
    VariableSource,
)
from scriptvars.core.logging import ResolverLogger, configure_structlog
from scriptvars.environment import load_environment
from scriptvars.interpolation import Interpolator, find_placeholders
from scriptvars.resolver import NOT_FOUND, VariableResolver
from scriptvars.sessions import VariableSession
from scriptvars.snapshot import load_snapshot, save_snapshot

__all__ = [
    "DEFAULT_CONFIG",
    "NOT_FOUND",
    "AssertionFailure",
    "AssertionResult",
    "ConfigValidationError",
    "EnvironmentFileError",
    "Interpolator",
    "Resolution",
    "ResolverConfig",
    "ResolverLogger",
    "ScriptVarsError",
    "SessionNotOpenError",
    "SnapshotFileError",
    "UndefinedVariableError",
    "VariableResolver",
    "VariableSession",
    "VariableSource",
    "assert_equals",
    "check_equals",
    "configure_structlog",
    "find_placeholders",
    "load_config",
    "load_environment",
    "load_snapshot",
    "save_snapshot",
]
