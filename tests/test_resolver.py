"""Tests for scriptvars.resolver.

Covers snapshot-over-environment precedence, presence checks for falsy
values, the NOT_FOUND sentinel, and lookup results.
"""

from __future__ import annotations

import copy
import logging
import pickle
import threading
from types import MappingProxyType

import pytest

from scriptvars.core.logging import ResolverLogger
from scriptvars.core.models import VariableSource
from scriptvars.resolver import NOT_FOUND, VariableResolver


@pytest.fixture
def resolver() -> VariableResolver:
    return VariableResolver({}, MappingProxyType({"BASE_URL": "http://example.com", "user": "dev"}))


class TestGetSet:
    """Test the set/get contract."""

    def test_environment_fallback(self, resolver: VariableResolver):
        """Test keys only in the environment resolve from it."""
        assert resolver.get("BASE_URL") == "http://example.com"

    def test_set_overrides_environment(self, resolver: VariableResolver):
        """Test set() takes precedence over an environment entry."""
        resolver.set("BASE_URL", "http://override")
        assert resolver.get("BASE_URL") == "http://override"

    def test_set_then_get_returns_value(self, resolver: VariableResolver):
        """Test any value written is read back unchanged."""
        value = {"nested": [1, 2, 3]}
        resolver.set("payload", value)
        assert resolver.get("payload") is value

    def test_set_overwrites_prior_entry(self, resolver: VariableResolver):
        resolver.set("token", "first")
        resolver.set("token", "second")
        assert resolver.get("token") == "second"

    def test_snapshot_precedence_when_both_present(self):
        """Test the snapshot wins when both stores hold the key."""
        resolver = VariableResolver({"host": "snap"}, {"host": "env"})
        assert resolver.get("host") == "snap"

    def test_missing_key_returns_sentinel(self):
        """Test a key absent from both stores resolves to NOT_FOUND."""
        resolver = VariableResolver({}, {})
        assert resolver.get("missing") is NOT_FOUND

    def test_missing_key_returns_default(self, resolver: VariableResolver):
        assert resolver.get("missing", "fallback") == "fallback"

    def test_set_does_not_touch_environment(self):
        environment = {"user": "dev"}
        resolver = VariableResolver({}, environment)
        resolver.set("user", "admin")
        assert environment == {"user": "dev"}

    def test_set_writes_into_injected_snapshot(self):
        """Test the resolver uses the host's mapping rather than a copy."""
        snapshot: dict = {}
        resolver = VariableResolver(snapshot, {})
        resolver.set("id", 7)
        assert snapshot == {"id": 7}


class TestFalsyValues:
    """Stored falsy values must not fall through to the environment."""

    @pytest.mark.parametrize("value", [None, "", 0, False, [], {}])
    def test_stored_falsy_value_is_returned(self, value):
        resolver = VariableResolver({}, {"key": "from-env"})
        resolver.set("key", value)
        assert resolver.get("key") == value
        assert resolver.get("key") is not NOT_FOUND

    def test_stored_none_is_distinct_from_missing(self):
        resolver = VariableResolver({"key": None}, {})
        assert resolver.get("key") is None
        assert resolver.get("other") is NOT_FOUND

    def test_environment_none_is_found(self):
        resolver = VariableResolver({}, {"key": None})
        assert resolver.get("key") is None


class TestSentinel:
    """Test NOT_FOUND behaves as a singleton distinct from real values."""

    def test_sentinel_is_falsy(self):
        assert not NOT_FOUND

    def test_sentinel_repr(self):
        assert repr(NOT_FOUND) == "NOT_FOUND"

    def test_sentinel_survives_copy_and_pickle(self):
        assert copy.deepcopy(NOT_FOUND) is NOT_FOUND
        assert pickle.loads(pickle.dumps(NOT_FOUND)) is NOT_FOUND

    def test_sentinel_not_equal_to_none(self):
        assert NOT_FOUND != None  # noqa: E711


class TestLookup:
    """Test lookup() results report the source tier."""

    def test_lookup_snapshot(self):
        resolver = VariableResolver({"k": 1}, {"k": 2})
        result = resolver.lookup("k")
        assert result.found is True
        assert result.value == 1
        assert result.source == VariableSource.SNAPSHOT

    def test_lookup_environment(self):
        resolver = VariableResolver({}, {"k": 2})
        result = resolver.lookup("k")
        assert result.found is True
        assert result.source == VariableSource.ENVIRONMENT

    def test_lookup_missing(self):
        result = VariableResolver({}, {}).lookup("k")
        assert result.found is False
        assert result.value is None
        assert result.source == VariableSource.NONE


class TestContainerProtocol:
    """Test contains(), keys() and dunder helpers."""

    def test_contains(self, resolver: VariableResolver):
        resolver.set("token", None)
        assert resolver.contains("token")
        assert "BASE_URL" in resolver
        assert "missing" not in resolver
        assert 42 not in resolver

    def test_keys_snapshot_first_without_duplicates(self):
        resolver = VariableResolver({"b": 1, "a": 2}, {"a": 3, "c": 4})
        assert resolver.keys() == ["b", "a", "c"]
        assert list(resolver) == ["b", "a", "c"]
        assert len(resolver) == 3

    def test_snapshot_copy_is_independent(self):
        resolver = VariableResolver({"a": 1}, {})
        copied = resolver.snapshot_copy()
        copied["a"] = 99
        assert resolver.get("a") == 1

    def test_restore_replaces_in_place(self):
        snapshot = {"a": 1, "b": 2}
        resolver = VariableResolver(snapshot, {})
        resolver.restore({"c": 3})
        assert resolver.snapshot is snapshot
        assert snapshot == {"c": 3}


class TestThreadSafety:
    """Test the locked resolver under concurrent writers."""

    def test_concurrent_writes(self):
        quiet = ResolverLogger(logging.getLogger("scriptvars-test-quiet"))
        resolver = VariableResolver({}, {}, thread_safe=True, logger=quiet)

        def writer(prefix: str) -> None:
            for i in range(200):
                resolver.set(f"{prefix}-{i}", i)

        threads = [threading.Thread(target=writer, args=(str(n),)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(resolver) == 800
        assert resolver.get("3-199") == 199


class TestLogging:
    """Test resolver debug events carry keys but never values."""

    def test_set_and_get_events(self, captured_logger, log_capture):
        resolver = VariableResolver({}, {"user": "dev"}, logger=captured_logger)
        resolver.set("token", "secret-value")
        resolver.get("user")

        set_events = log_capture.named("variable.set")
        resolved = log_capture.named("variable.resolved")
        assert set_events[0]["key"] == "token"
        assert resolved[0]["source"] == "environment"
        assert all("secret-value" not in str(e) for e in log_capture.events)

    def test_default_logger_is_quiet(self, capsys: pytest.CaptureFixture[str]):
        """Test per-access events stay silent unless logging is configured."""
        resolver = VariableResolver({}, {"a": 1})
        resolver.set("b", 2)
        resolver.get("a")

        assert resolver.logger.logger is logging.getLogger("scriptvars.resolver")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
