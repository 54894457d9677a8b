"""Equality assertions for checking resolved values.

``assert_equals`` raises a typed AssertionFailure carrying both compared
values; ``check_equals`` returns the same information as a result model.
"""

from __future__ import annotations

from typing import Any

from scriptvars.core.errors import AssertionFailure
from scriptvars.core.logging import ResolverLogger
from scriptvars.core.models import AssertionResult


def check_equals(expected: Any, actual: Any, message: str | None = None) -> AssertionResult:
    """Compare two values without raising.

    Examples:
        >>> check_equals(200, 200).passed
        True
        >>> check_equals(200, 404, "status").message
        'status'
    """
    return AssertionResult(
        passed=bool(expected == actual), expected=expected, actual=actual, message=message
    )


def assert_equals(
    expected: Any,
    actual: Any,
    message: str | None = None,
    logger: ResolverLogger | None = None,
) -> None:
    """Raise AssertionFailure unless *expected* equals *actual*.

    Args:
        expected: Value the caller expected
        actual: Value actually observed
        message: Optional context included in the failure
        logger: Optional ResolverLogger notified of failures

    Raises:
        AssertionFailure: If the values differ
    """
    result = check_equals(expected, actual, message)
    if result.passed:
        return
    if logger is not None:
        logger.log_assertion_failed(message)
    raise AssertionFailure(expected, actual, message)
