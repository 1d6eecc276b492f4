"""Tests for the tab-completion engine.

The Completer's logic is pure (no I/O) — it analyses the input line and
returns candidate strings, making it fully testable without readline.
"""

from unittest.mock import patch

from webshell.completer import Completer
from webshell.config import ShellConfig
from webshell.shell import Shell


def _make_completer() -> Completer:
    """Create a completer over a shell with a small tree."""
    config = ShellConfig(
        directories=("/etc", "/home/user"),
        files=("/etc/motd", "/etc/hosts", "/readme"),
        env={"USER": "guest", "UID": "1000"},
    )
    return Completer(Shell(config=config))


class TestCommandCompletion:
    """Verify completion of command names (first word on the line)."""

    def test_partial_match(self) -> None:
        """A partial prefix returns only matching commands."""
        assert _make_completer().completions("e", "e") == ["echo", "env", "exit", "export"]

    def test_unique_prefix(self) -> None:
        """A prefix matching exactly one command returns just that."""
        assert _make_completer().completions("hel", "hel") == ["help"]

    def test_no_match(self) -> None:
        """An unrecognised prefix returns no candidates."""
        assert _make_completer().completions("zzz", "zzz") == []


class TestArgumentCompletion:
    """Verify completion of arguments."""

    def test_dollar_variables(self) -> None:
        """$ prefixes complete environment variable names."""
        assert _make_completer().completions("$U", "echo $U") == ["$UID", "$USER"]

    def test_absolute_path(self) -> None:
        """Absolute prefixes list the matching children."""
        completer = _make_completer()
        assert completer.completions("/etc/h", "cat /etc/h") == ["/etc/hosts"]
        assert completer.completions("/", "ls /") == ["/etc/", "/home/", "/readme"]

    def test_relative_path(self) -> None:
        """Bare names complete against the working directory."""
        assert _make_completer().completions("r", "ls r") == ["readme"]

    def test_missing_directory(self) -> None:
        """A prefix under a missing directory has no candidates."""
        assert _make_completer().completions("/nope/x", "ls /nope/x") == []


class TestReadlineCallback:
    """Verify the readline-facing complete() method."""

    def test_complete_iterates_candidates(self) -> None:
        """complete() returns candidates by index, then None."""
        completer = _make_completer()
        with patch("webshell.completer.readline.get_line_buffer", return_value="hel"):
            assert completer.complete("hel", 0) == "help"
            assert completer.complete("hel", 1) is None
