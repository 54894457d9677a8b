"""Shared pytest fixtures for all tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import structlog

from scriptvars.core.logging import ResolverLogger
from scriptvars.core.models import ResolverConfig


class StructlogCapture:
    """Helper to capture structlog events."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Capture event dict (structlog processor signature)."""
        self.events.append(event_dict.copy())
        return event_dict

    def named(self, event: str) -> list[dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture
def log_capture() -> StructlogCapture:
    """Fixture providing structlog event capture."""
    return StructlogCapture()


@pytest.fixture
def captured_logger(log_capture: StructlogCapture) -> ResolverLogger:
    """ResolverLogger whose structlog events land in log_capture."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            log_capture,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return ResolverLogger(structlog.get_logger("test_scriptvars"))


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Env file with dev and prod environments."""
    path = tmp_path / "http-client.env.json"
    path.write_text(
        json.dumps(
            {
                "dev": {"BASE_URL": "http://localhost:8000", "user": "dev", "debug": False},
                "prod": {"BASE_URL": "https://api.example.com"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def session_config(env_file: Path) -> ResolverConfig:
    """Config pointing at env_file, with the snapshot beside it."""
    return ResolverConfig(env_file=env_file.name, env_name="dev", snapshot_file=".snapshot.json")
