"""Two-tier variable resolution over a snapshot overlay and an environment.

A VariableResolver reads and writes named values against two mappings
supplied by the host:

- the **snapshot** (overlay store): mutable, session-local, written only
  through ``set``;
- the **environment**: read-only defaults, typically the selected entry of
  an env file.

Lookups check the snapshot first and fall back to the environment. Presence
is decided with ``key in mapping``, so a stored ``None``, ``""``, ``0`` or
``False`` is returned as-is and never falls through to the environment.
Keys missing from both stores resolve to the ``NOT_FOUND`` sentinel.

Usage:
    >>> from scriptvars.resolver import NOT_FOUND, VariableResolver
    >>> resolver = VariableResolver({}, {"BASE_URL": "http://example.com"})
    >>> resolver.get("BASE_URL")
    'http://example.com'
    >>> resolver.set("BASE_URL", "http://override")
    >>> resolver.get("BASE_URL")
    'http://override'
    >>> resolver.get("missing") is NOT_FOUND
    True
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator, Mapping, MutableMapping
from enum import Enum
from typing import Any

from scriptvars.core.logging import ResolverLogger
from scriptvars.core.models import Resolution, VariableSource


class _NotFound(Enum):
    NOT_FOUND = "NOT_FOUND"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound.NOT_FOUND
"""Sentinel returned by ``get`` for keys absent from both stores."""


class VariableResolver:
    """Read/write access to variables with snapshot-over-environment precedence.

    The resolver holds references to the stores it is given; it does not
    copy them. Writes go to ``snapshot`` only and the environment is never
    mutated.

    Attributes:
        snapshot: Overlay store, checked first
        environment: Fallback store, never written
    """

    def __init__(
        self,
        snapshot: MutableMapping[str, Any],
        environment: Mapping[str, Any],
        thread_safe: bool = False,
        logger: ResolverLogger | None = None,
    ) -> None:
        """Bind the resolver to its two stores.

        Args:
            snapshot: Mutable overlay store owned by the hosting session
            environment: Read-only default store
            thread_safe: Guard overlay reads and writes with a lock
            logger: Optional ResolverLogger for debug events. Defaults to the
                    stdlib "scriptvars.resolver" logger, silent until configured.
        """
        self.snapshot = snapshot
        self.environment = environment
        self._lock: Any = threading.RLock() if thread_safe else contextlib.nullcontext()
        self.logger = logger or ResolverLogger(logging.getLogger("scriptvars.resolver"))

    def set(self, key: str, value: Any) -> None:
        """Write *value* under *key* in the snapshot, replacing any prior entry."""
        with self._lock:
            self.snapshot[key] = value
        self.logger.log_variable_set(key)

    def get(self, key: str, default: Any = NOT_FOUND) -> Any:
        """Return the value for *key*, snapshot first, then environment.

        Args:
            key: Variable name
            default: Returned when neither store holds *key* (NOT_FOUND by default)

        Returns:
            The stored value, or *default* when absent from both stores.
        """
        resolution = self.lookup(key)
        if not resolution.found:
            return default
        return resolution.value

    def lookup(self, key: str) -> Resolution:
        """Resolve *key* and report which store it came from."""
        with self._lock:
            if key in self.snapshot:
                resolution = Resolution(
                    key=key, found=True, value=self.snapshot[key], source=VariableSource.SNAPSHOT
                )
            elif key in self.environment:
                resolution = Resolution(
                    key=key,
                    found=True,
                    value=self.environment[key],
                    source=VariableSource.ENVIRONMENT,
                )
            else:
                resolution = Resolution(key=key, found=False)
        self.logger.log_variable_resolved(key, resolution.source.value)
        return resolution

    def contains(self, key: str) -> bool:
        """Return True if either store holds *key*."""
        with self._lock:
            return key in self.snapshot or key in self.environment

    def snapshot_copy(self) -> dict[str, Any]:
        """Return a shallow copy of the overlay store."""
        with self._lock:
            return dict(self.snapshot)

    def restore(self, entries: Mapping[str, Any]) -> None:
        """Replace the overlay store's contents with *entries*, in place."""
        with self._lock:
            self.snapshot.clear()
            self.snapshot.update(entries)

    def keys(self) -> list[str]:
        """Return all resolvable names, snapshot keys first."""
        with self._lock:
            names = list(self.snapshot)
        seen = set(names)
        names.extend(k for k in self.environment if k not in seen)
        return names

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())
