"""Exception classes for variable file handling and session failures.

Provides domain-specific exceptions for configuration validation, environment
and snapshot file IO, placeholder rendering, and assertion helpers. The
variable resolver itself never raises: absence of a key is a normal outcome
represented by the NOT_FOUND sentinel.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ScriptVarsError(Exception):
    """Base class for all scriptvars errors."""

    pass


class ConfigValidationError(ScriptVarsError):
    """Raised when resolver configuration is invalid.

    This exception wraps Pydantic ValidationError with a clearer
    domain-specific name for scriptvars consumers.
    """

    pass


class EnvironmentFileError(ScriptVarsError):
    """Raised when the environment file cannot be read or parsed.

    Attributes:
        path: Path of the offending environment file
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read environment file - {self.path}: {reason}")


class SnapshotFileError(ScriptVarsError):
    """Raised when the snapshot file cannot be read, parsed or written.

    Attributes:
        path: Path of the offending snapshot file
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not access the snapshot file - {self.path}: {reason}")


class UndefinedVariableError(ScriptVarsError):
    """Raised when strict rendering meets placeholders with no value.

    Attributes:
        names: Sorted list of unresolved variable names
    """

    def __init__(self, names: list[str]) -> None:
        self.names = sorted(names)
        super().__init__(f"Undefined variables: {self.names}")


class SessionNotOpenError(ScriptVarsError):
    """Raised when a session's resolver is used before open() or after close()."""

    pass


class AssertionFailure(ScriptVarsError, AssertionError):
    """Raised by assert_equals when the compared values differ.

    Carries both compared values so callers can report them without
    parsing the message.

    Attributes:
        expected: Value the caller expected
        actual: Value actually observed
        message: Optional caller-supplied context
    """

    def __init__(self, expected: Any, actual: Any, message: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.message = message
        text = f"expected {expected!r}, got {actual!r}"
        if message:
            text = f"{message}: {text}"
        super().__init__(text)
