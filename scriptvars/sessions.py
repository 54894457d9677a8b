"""Variable sessions tying env file, snapshot file and resolver together.

A session covers one run over a request file: the selected environment is
loaded once, the overlay store is restored from the snapshot file, values are
read and written through the resolver, and the overlay is saved back when the
session closes.

Usage Examples
--------------
Basic lifecycle:
    >>> from scriptvars import ResolverConfig, VariableSession
    >>> config = ResolverConfig(env_file="http-client.env.json", env_name="dev")
    >>> with VariableSession(config) as session:
    ...     session.resolver.set("token", "abc123")
    ...     print(session.render("Bearer {{ token }}"))
    Bearer abc123

Discarding unsaved writes between requests:
    >>> session = VariableSession(config).open()
    >>> session.resolver.set("scratch", 1)
    >>> session.reset()
    >>> "scratch" in session.resolver
    False
    >>> session.close()
"""

from __future__ import annotations

import copy
from pathlib import Path
from types import TracebackType
from typing import Any

from scriptvars.core.errors import SessionNotOpenError, SnapshotFileError
from scriptvars.core.logging import ResolverLogger
from scriptvars.core.models import ResolverConfig
from scriptvars.environment import load_environment
from scriptvars.interpolation import Interpolator
from scriptvars.resolver import VariableResolver
from scriptvars.snapshot import load_snapshot, save_snapshot


class VariableSession:
    """Owns the stores behind a VariableResolver for the length of one run.

    Attributes:
        config: Validated session configuration
        base_dir: Directory that relative env/snapshot paths resolve against
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        base_dir: str | Path | None = None,
        logger: ResolverLogger | None = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.logger = logger or ResolverLogger()
        self._resolver_logger = logger
        self._resolver: VariableResolver | None = None
        self._saved_snapshot: dict[str, Any] = {}

    @property
    def env_path(self) -> Path:
        return self.base_dir / self.config.env_file

    @property
    def snapshot_path(self) -> Path:
        return self.base_dir / self.config.snapshot_file

    @property
    def is_open(self) -> bool:
        return self._resolver is not None

    @property
    def resolver(self) -> VariableResolver:
        """The session resolver.

        Raises:
            SessionNotOpenError: If open() has not been called or the
                                 session was closed
        """
        if self._resolver is None:
            raise SessionNotOpenError("Variable session is not open")
        return self._resolver

    def open(self) -> VariableSession:
        """Load the environment and snapshot and build the resolver.

        Returns:
            self, so ``VariableSession(config).open()`` can be chained

        Raises:
            EnvironmentFileError: If the env file is unreadable or malformed
            SnapshotFileError: If the snapshot file is unreadable or malformed
        """
        environment = load_environment(
            self.env_path,
            self.config.env_name,
            create_missing=self.config.create_missing_env_file,
            logger=self.logger,
        )
        self._saved_snapshot = load_snapshot(self.snapshot_path, logger=self.logger)
        self._resolver = VariableResolver(
            copy.deepcopy(self._saved_snapshot),
            environment,
            thread_safe=self.config.thread_safe,
            logger=self._resolver_logger,
        )
        self.logger.log_session_opened(
            self.config.env_name, len(environment), len(self._saved_snapshot)
        )
        return self

    def reset(self) -> None:
        """Restore the overlay store to the last saved snapshot."""
        self.resolver.restore(copy.deepcopy(self._saved_snapshot))

    def save(self) -> dict[str, Any]:
        """Persist the overlay store and make it the new reset point.

        Returns:
            dict: Entries written to the snapshot file
        """
        persisted = save_snapshot(
            self.snapshot_path, self.resolver.snapshot_copy(), logger=self.logger
        )
        self._saved_snapshot = copy.deepcopy(persisted)
        return persisted

    def render(self, value: Any, strict: bool = True) -> Any:
        """Substitute ``{{ name }}`` placeholders using the session resolver."""
        return Interpolator(self.resolver).render(value, strict=strict)

    def close(self) -> None:
        """Save the overlay store if configured, then release the resolver.

        The resolver is released even when saving fails.

        Raises:
            SnapshotFileError: If the snapshot file cannot be written
        """
        if self._resolver is None:
            return
        persisted = self.config.persist_snapshot
        snapshot_count = len(self._resolver.snapshot)
        try:
            if persisted:
                self.save()
        finally:
            self._resolver = None
            self.logger.log_session_closed(snapshot_count, persisted)

    def __enter__(self) -> VariableSession:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            self.close()
            return
        # The body's exception propagates; a failed save is only logged.
        try:
            self.close()
        except SnapshotFileError as save_error:
            self.logger.log_snapshot_save_failed(str(save_error.path), str(save_error))
