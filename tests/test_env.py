"""Tests for the environment variable store."""

import pytest

from webshell.env import Environment


class TestEnvironment:
    """Verify the Environment key-value store."""

    def test_get_and_set(self) -> None:
        """Setting a variable should make it retrievable."""
        env = Environment()
        env.set("HOME", "/root")
        assert env.get("HOME") == "/root"

    def test_get_missing_returns_none(self) -> None:
        """Getting a missing key should return None."""
        assert Environment().get("MISSING") is None

    def test_lookup_missing_is_empty(self) -> None:
        """lookup() treats missing variables as empty strings."""
        assert Environment().lookup("MISSING") == ""

    def test_delete_missing_raises(self) -> None:
        """Deleting a non-existent key should raise KeyError."""
        with pytest.raises(KeyError):
            Environment().delete("NOPE")

    def test_mapping_protocol(self) -> None:
        """Item access, membership and iteration behave like a dict."""
        env = Environment({"A": "1"})
        env["B"] = "2"
        assert env["A"] == "1"
        assert "B" in env
        assert sorted(env) == ["A", "B"]
        assert len(env) == 2
