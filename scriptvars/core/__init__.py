"""Core scriptvars abstractions and models.

This module provides the foundational types shared by the resolver,
file loaders and sessions: Pydantic models for configuration and lookup
results, structured logging, and error types.
"""

from __future__ import annotations

from .errors import (
    AssertionFailure,
    ConfigValidationError,
    EnvironmentFileError,
    ScriptVarsError,
    SessionNotOpenError,
    SnapshotFileError,
    UndefinedVariableError,
)
from .models import AssertionResult, Resolution, ResolverConfig, VariableSource

__all__ = [
    "AssertionFailure",
    "AssertionResult",
    "ConfigValidationError",
    "EnvironmentFileError",
    "Resolution",
    "ResolverConfig",
    "ScriptVarsError",
    "SessionNotOpenError",
    "SnapshotFileError",
    "UndefinedVariableError",
    "VariableSource",
]
