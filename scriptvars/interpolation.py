"""Placeholder interpolation backed by a VariableResolver.

Replaces ``{{ name }}`` placeholders in strings, and recursively in lists and
dict values, with the values the resolver returns. Names are plain variable
keys; there is no expression evaluation.

Escape a literal ``{{`` as ``\\{{``.
"""

from __future__ import annotations

import json
import re
from typing import Any

from scriptvars.core.errors import UndefinedVariableError
from scriptvars.resolver import VariableResolver

# An escaped opener matches first so the braces after it are never a placeholder
PLACEHOLDER_PATTERN = re.compile(r"(?P<escaped>\\\{\{)|\{\{\s*(?P<name>[^{}\s]+)\s*\}\}")


def find_placeholders(text: str) -> list[str]:
    """Return the variable names referenced in *text*, first occurrence order."""
    names: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        name = match.group("name")
        if name is not None and name not in names:
            names.append(name)
    return names


def render_value(value: Any) -> str:
    """Convert a resolved value to its placeholder text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


class Interpolator:
    """Substitutes placeholders using a resolver.

    Attributes:
        resolver: Source of variable values
        undefined_vars: Names left unresolved by the last render() call
    """

    def __init__(self, resolver: VariableResolver) -> None:
        self.resolver = resolver
        self.undefined_vars: set[str] = set()

    def render(self, value: Any, strict: bool = True) -> Any:
        """Substitute placeholders in a string, list or dict.

        Args:
            value: Value to render; non-container, non-string values pass through
            strict: Raise on unresolved names instead of leaving them in place

        Returns:
            Value of the same shape with placeholders substituted

        Raises:
            UndefinedVariableError: If strict and any name is unresolved
        """
        self.undefined_vars.clear()
        result = self._render(value)
        if strict and self.undefined_vars:
            raise UndefinedVariableError(list(self.undefined_vars))
        return result

    def _render(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._render_string(value)
        if isinstance(value, list):
            return [self._render(item) for item in value]
        if isinstance(value, dict):
            return {k: self._render(v) for k, v in value.items()}
        return value

    def _render_string(self, text: str) -> str:
        def replace(match: re.Match[str]) -> str:
            if match.group("escaped") is not None:
                return "{{"
            name = match.group("name")
            resolution = self.resolver.lookup(name)
            if not resolution.found:
                self.undefined_vars.add(name)
                return match.group(0)
            return render_value(resolution.value)

        return PLACEHOLDER_PATTERN.sub(replace, text)
