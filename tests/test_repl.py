"""Tests for the REPL.

The REPL is the interactive terminal interface.  Its helpers are pure;
the loop itself is driven with patched ``input`` and ``print``.
"""

from unittest.mock import patch

from webshell.repl import build_prompt, format_banner, run
from webshell.shell import Shell


class TestREPLHelpers:
    """Verify REPL helper functions."""

    def test_build_prompt(self) -> None:
        """The prompt shows the session label."""
        assert build_prompt(Shell()) == "WebShell $ "

    def test_continuation_prompt(self) -> None:
        """While a quote is open the continuation prompt is used."""
        shell = Shell()
        shell.execute("echo 'open")
        assert build_prompt(shell) == "> "

    def test_format_banner(self) -> None:
        """The banner names the shell and mentions help."""
        banner = format_banner(Shell())
        assert "WebShell" in banner
        assert "help" in banner


class TestRun:
    """Verify the interactive loop."""

    def test_runs_until_exit(self) -> None:
        """Lines are executed and printed until exit."""
        inputs = iter(["echo hello", "exit", "echo never"])
        with (
            patch("builtins.input", side_effect=lambda _prompt: next(inputs)),
            patch("builtins.print") as mock_print,
            patch("webshell.repl.readline"),
        ):
            run()
        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        assert "hello" in printed
        assert "never" not in printed
        assert printed[-1] == "Session closed."

    def test_eof_ends_session(self) -> None:
        """Ctrl+D ends the loop gracefully."""
        with (
            patch("builtins.input", side_effect=EOFError),
            patch("builtins.print") as mock_print,
            patch("webshell.repl.readline"),
        ):
            run()
        assert mock_print.call_args_list[-1].args == ("Session closed.",)

    def test_keyboard_interrupt(self) -> None:
        """Ctrl+C ends the loop with a message."""
        with (
            patch("builtins.input", side_effect=KeyboardInterrupt),
            patch("builtins.print") as mock_print,
            patch("webshell.repl.readline"),
        ):
            run()
        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        assert "\nInterrupted." in printed
