"""Structured logging for variable resolution and file persistence events.

Provides ResolverLogger class that uses structlog for structured event emission
(variable.set, snapshot.saved, session.opened). Configures structlog
with console rendering by default but allows custom configuration.

Only variable names and counts are logged. Values may hold credentials
taken from the environment file and are never emitted.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_structlog(level: int = logging.INFO, use_json: bool = False) -> None:
    """Configure structlog with sensible defaults for resolver logging.

    Args:
        level: Minimum log level (default: logging.INFO)
        use_json: If True, use JSON renderer; otherwise use console renderer
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class ResolverLogger:
    """Wrapper for structured logging of resolver and session events.

    Accepts either structlog or standard logging.Logger instances and normalizes
    emission so callers do not need to care which backend is in use.
    """

    def __init__(self, logger: Any = None) -> None:
        """Initialize ResolverLogger with optional custom logger.

        Args:
            logger: Optional structlog BoundLogger, logging.Logger, or string name.
                    If None, a default structlog logger named 'scriptvars' is created.
                    If string, creates a structlog logger with that name.
        """
        if logger is None:
            self._logger = structlog.get_logger("scriptvars")
        elif isinstance(logger, str):
            self._logger = structlog.get_logger(logger)
        else:
            self._logger = logger

    @property
    def logger(self) -> Any:
        """Expose the underlying logger instance (structlog or logging.Logger)."""
        return self._logger

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        """Emit a log record regardless of logger backend."""
        extra = dict(fields)
        extra.setdefault("log_message", message)
        # Ensure event key is always present for downstream processors
        extra.setdefault("event", message.split(".", 1)[-1] if "." in message else message)

        if isinstance(self._logger, logging.Logger):
            self._logger.log(level, message, extra=extra)
            return

        method_name = logging.getLevelName(level).lower()
        log_method = getattr(self._logger, method_name, None)
        if not callable(log_method):
            log_method = self._logger.info

        log_kwargs = dict(extra)
        event_value = log_kwargs.pop("event", None)
        event_arg = event_value if event_value is not None else message
        log_method(event_arg, **log_kwargs)

    def log_variable_set(self, key: str) -> None:
        """Log a write to the overlay store at DEBUG level."""
        self._emit(logging.DEBUG, "scriptvars.variable.set", event="variable.set", key=key)

    def log_variable_resolved(self, key: str, source: str) -> None:
        """Log a lookup at DEBUG level.

        Args:
            key: Variable name looked up
            source: Store tier the value came from ("snapshot", "environment", "none")
        """
        self._emit(
            logging.DEBUG,
            "scriptvars.variable.resolved",
            event="variable.resolved",
            key=key,
            source=source,
        )

    def log_environment_loaded(self, path: str, env_name: str, variable_count: int) -> None:
        """Log that a named environment was read from the env file.

        Args:
            path: Environment file path
            env_name: Selected environment name
            variable_count: Number of variables in the selected environment
        """
        self._emit(
            logging.INFO,
            "scriptvars.environment.loaded",
            event="environment.loaded",
            path=path,
            env_name=env_name,
            variable_count=variable_count,
        )

    def log_environment_created(self, path: str) -> None:
        """Log creation of an empty env file."""
        self._emit(
            logging.INFO, "scriptvars.environment.created", event="environment.created", path=path
        )

    def log_snapshot_loaded(self, path: str, variable_count: int) -> None:
        """Log that the snapshot file was read."""
        self._emit(
            logging.INFO,
            "scriptvars.snapshot.loaded",
            event="snapshot.loaded",
            path=path,
            variable_count=variable_count,
        )

    def log_snapshot_saved(self, path: str, variable_count: int) -> None:
        """Log that the overlay store was written to the snapshot file."""
        self._emit(
            logging.INFO,
            "scriptvars.snapshot.saved",
            event="snapshot.saved",
            path=path,
            variable_count=variable_count,
        )

    def log_snapshot_save_failed(self, path: str, error: str) -> None:
        """Log a snapshot write that failed while another error was propagating."""
        self._emit(
            logging.ERROR,
            "scriptvars.snapshot.save_failed",
            event="snapshot.save_failed",
            path=path,
            error=error,
        )

    def log_snapshot_value_skipped(self, key: str, value_type: str) -> None:
        """Log a snapshot entry dropped because it is not JSON-serializable.

        Emits a WARNING-level event so silently lost state is still visible.

        Args:
            key: Variable name that was skipped
            value_type: Python type name of the skipped value
        """
        self._emit(
            logging.WARNING,
            "scriptvars.snapshot.value_skipped",
            event="snapshot.value_skipped",
            key=key,
            value_type=value_type,
        )

    def log_assertion_failed(self, message: str | None) -> None:
        """Log a failed equality assertion at WARNING level."""
        self._emit(
            logging.WARNING,
            "scriptvars.assertion.failed",
            event="assertion.failed",
            assertion_message=message,
        )

    def log_session_opened(self, env_name: str, env_count: int, snapshot_count: int) -> None:
        """Log the start of a variable session.

        Args:
            env_name: Selected environment name
            env_count: Number of environment variables available
            snapshot_count: Number of overlay variables restored
        """
        self._emit(
            logging.INFO,
            "scriptvars.session.opened",
            event="session.opened",
            env_name=env_name,
            env_count=env_count,
            snapshot_count=snapshot_count,
        )

    def log_session_closed(self, snapshot_count: int, persisted: bool) -> None:
        """Log the end of a variable session."""
        self._emit(
            logging.INFO,
            "scriptvars.session.closed",
            event="session.closed",
            snapshot_count=snapshot_count,
            persisted=persisted,
        )
