"""Pydantic models for resolver configuration and lookup results.

Provides validated data models for the resolver configuration, the source
tier of a resolved variable, and result types for lookups and equality
checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scriptvars.core.errors import ConfigValidationError


class VariableSource(str, Enum):
    """Store tier a variable was resolved from.

    SNAPSHOT: Session-local overlay store (checked first)
    ENVIRONMENT: Read-only environment store (fallback)
    NONE: Key absent from both stores
    """
    SNAPSHOT = "snapshot"
    ENVIRONMENT = "environment"
    NONE = "none"


class ResolverConfig(BaseModel):
    """Type-safe configuration for a variable session.

    Attributes:
        env_file: JSON file holding named environments
        env_name: Name of the environment selected from env_file
        snapshot_file: JSON file persisting the overlay store between runs
        persist_snapshot: Save the overlay store when the session closes
        create_missing_env_file: Write an empty env file if none exists
        thread_safe: Guard overlay access with a lock
    """

    env_file: str = Field(
        default="http-client.env.json",
        description="JSON file holding named environments"
    )

    env_name: str = Field(
        default="dev",
        description="Environment selected from env_file"
    )

    snapshot_file: str = Field(
        default=".snapshot.json",
        description="JSON file persisting the overlay store"
    )

    persist_snapshot: bool = Field(
        default=True,
        description="Save the overlay store when the session closes"
    )

    create_missing_env_file: bool = Field(
        default=True,
        description="Write an empty env file if none exists"
    )

    thread_safe: bool = Field(
        default=False,
        description="Guard overlay reads and writes with a lock"
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid resolver config: {e}") from e

    @classmethod
    def model_validate(cls, obj: Any, *, strict: bool | None = None, context: dict[str, Any] | None = None) -> "ResolverConfig":
        try:
            return super().model_validate(obj, strict=strict, context=context)  # type: ignore[arg-type]
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid resolver config: {e}") from e

    @field_validator("env_name", "env_file", "snapshot_file")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure names and paths are not empty."""
        if not v.strip():
            raise ValueError("Value must not be empty")
        return v


class Resolution(BaseModel):
    """Outcome of a single variable lookup.

    ``value`` is None both for a stored None and for a missing key, so
    callers must consult ``found`` to tell them apart.

    Attributes:
        key: Variable name that was looked up
        found: Whether either store holds the key
        value: Resolved value (None when not found)
        source: Store tier the value came from
    """

    model_config = ConfigDict(frozen=True)

    key: str
    found: bool
    value: Any = None
    source: VariableSource = VariableSource.NONE


class AssertionResult(BaseModel):
    """Non-raising result of an equality check.

    Attributes:
        passed: Whether expected == actual
        expected: Value the caller expected
        actual: Value actually observed
        message: Optional caller-supplied context
    """

    model_config = ConfigDict(frozen=True)

    passed: bool
    expected: Any = None
    actual: Any = None
    message: str | None = None
