"""Tests for the shell session facade.

``execute`` is string-in, string-out: it tokenizes, dispatches, stores
the status, and returns whatever the command wrote.
"""

import io

import pytest

from webshell.commands import make_command
from webshell.errors import IncompleteInputError
from webshell.output import StreamSink
from webshell.shell import Shell
from webshell.state import ShellState


class TestExecute:
    """Verify single-line execution."""

    def test_empty_line(self) -> None:
        """An empty line does nothing and is not recorded."""
        shell = Shell()
        assert shell.execute("") == ""
        assert shell.execute("   ") == ""
        assert len(shell.history) == 0

    def test_status_recorded(self) -> None:
        """The status lands in last_exit_status and $?."""
        shell = Shell()
        shell.execute("frob")
        assert shell.state.last_exit_status == 127
        assert shell.state.environment.get("?") == "127"

    def test_unknown_command_output(self) -> None:
        """An unknown command reports one line."""
        assert Shell().execute("frob") == "frob: command not found"

    def test_unknown_path(self) -> None:
        """A path-like unknown command reports a path error."""
        shell = Shell()
        assert shell.execute("/") == "/: Is a directory"
        assert shell.state.last_exit_status == 126

    def test_quoted_line_that_tokenizes_to_nothing(self) -> None:
        """A line of empty quotes dispatches nothing and succeeds."""
        shell = Shell()
        assert shell.execute('""') == ""
        assert shell.state.last_exit_status == 0

    def test_extra_commands(self) -> None:
        """Extra commands are registered after the built-ins."""

        def _greet(state: ShellState, _options: list[str], args: list[str]) -> int:
            state.write_line(f"hello {' '.join(args)}")
            return 0

        shell = Shell(commands=[make_command("greet", _greet, summary="say hello")])
        assert shell.execute("greet world") == "hello world"
        assert "\tgreet: say hello" in shell.execute("help")

    def test_builtins_shadow_extra_commands(self) -> None:
        """A duplicate of a built-in name never wins."""

        def _fake(_state: ShellState, _options: list[str], _args: list[str]) -> int:
            return 42

        shell = Shell(commands=[make_command("pwd", _fake)])
        assert shell.execute("pwd") == "/"

    def test_stream_sink_returns_nothing(self) -> None:
        """With a stream sink the output goes to the stream."""
        stream = io.StringIO()
        shell = Shell(output=StreamSink(stream))
        assert shell.execute("echo hi") == ""
        assert stream.getvalue() == "hi\n"


class TestContinuation:
    """Verify multi-line input."""

    def test_open_quote_waits(self) -> None:
        """An open quote returns nothing and keeps the text pending."""
        shell = Shell()
        assert shell.execute('echo "abc') == ""
        assert shell.pending == 'echo "abc\n'
        assert len(shell.history) == 0

    def test_continued_line_runs(self) -> None:
        """Closing the quote on the next line runs the joined line."""
        shell = Shell()
        shell.execute('echo "abc')
        assert shell.execute('def"') == "abc\ndef"
        assert shell.pending == ""
        assert shell.history.entries == ['echo "abc\ndef"']

    def test_blank_line_inside_quote(self) -> None:
        """A blank line inside a quote is kept."""
        shell = Shell()
        shell.execute("echo 'a")
        shell.execute("")
        assert shell.execute("b'") == "a\n\nb"

    def test_run_line_reports_incomplete(self) -> None:
        """run_line returns None for an incomplete line."""
        assert Shell().run_line("echo 'x") is None


class TestRunScript:
    """Verify multi-line scripts."""

    def test_outputs_per_command(self) -> None:
        """Each command's output is collected; comments are skipped."""
        shell = Shell()
        script = "# setup\nmkdir /tmp\n\ncd /tmp\npwd\necho 'multi\nline'\n"
        assert shell.run_script(script) == ["", "", "/tmp", "multi\nline"]

    def test_stops_after_exit(self) -> None:
        """Nothing runs after exit."""
        shell = Shell()
        assert shell.run_script("echo a\nexit\necho b") == ["a", ""]
        assert shell.closed

    def test_unterminated_quote_raises(self) -> None:
        """A script ending inside a quote raises IncompleteInputError."""
        shell = Shell()
        with pytest.raises(IncompleteInputError):
            shell.run_script("echo 'never closed")
        assert shell.pending == ""
