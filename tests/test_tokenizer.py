"""Tests for the line tokenizer.

The tokenizer splits one raw line into words, handling quotes,
backslash escapes, ``$VAR`` and ``~`` expansion, and reports whether
the line needs more input before it can be dispatched.
"""

import pytest

from webshell.env import Environment
from webshell.errors import IncompleteInputError
from webshell.tokenizer import ParsedLine, tokenize


def _env(**extra: str) -> Environment:
    """Create an environment with HOME set to /home/user."""
    return Environment(initial={"HOME": "/home/user", **extra})


class TestSplitting:
    """Verify whitespace splitting."""

    def test_empty_line(self) -> None:
        """An empty line yields no arguments."""
        parsed = tokenize("", _env())
        assert parsed.arguments == []
        assert parsed.incomplete is False

    def test_whitespace_only(self) -> None:
        """Blanks and tabs alone yield no arguments."""
        assert tokenize("  \t ", _env()).arguments == []

    def test_simple_words(self) -> None:
        """Words separated by spaces become separate arguments."""
        assert tokenize("echo a b", _env()).arguments == ["echo", "a", "b"]

    def test_repeated_spaces_collapse(self) -> None:
        """Runs of whitespace do not create empty arguments."""
        assert tokenize("  echo   a  ", _env()).arguments == ["echo", "a"]

    def test_control_characters_split(self) -> None:
        """Any character up to 0x20 separates words outside quotes."""
        assert tokenize("a\x01b\nc", _env()).arguments == ["a", "b", "c"]


class TestQuoting:
    """Verify quote handling."""

    def test_double_quotes_keep_spaces(self) -> None:
        """A quoted phrase becomes one argument without the quotes."""
        assert tokenize('echo "a b"', _env()).arguments == ["echo", "a b"]

    def test_single_quotes_keep_spaces(self) -> None:
        """Single quotes behave like double quotes."""
        assert tokenize("echo 'a b'", _env()).arguments == ["echo", "a b"]

    def test_quote_styles_are_interchangeable(self) -> None:
        """Either quote character closes quoting opened by the other."""
        assert tokenize("echo \"a b' c", _env()).arguments == ["echo", "a b", "c"]

    def test_empty_quotes_are_dropped(self) -> None:
        """A pair of quotes with nothing inside produces no argument."""
        assert tokenize('echo ""', _env()).arguments == ["echo"]

    def test_quotes_inside_word(self) -> None:
        """Quotes inside a word only toggle the mode."""
        assert tokenize('ab"c d"e', _env()).arguments == ["abc de"]

    def test_tilde_in_quotes_is_literal(self) -> None:
        """A quoted tilde is not expanded."""
        assert tokenize('echo "~"', _env()).arguments == ["echo", "~"]


class TestEscaping:
    """Verify backslash escapes."""

    def test_escaped_quote(self) -> None:
        """An escaped quote is taken literally."""
        assert tokenize('echo \\"hi', _env()).arguments == ["echo", '"hi']

    def test_escaped_space(self) -> None:
        """An escaped space stays inside the word."""
        assert tokenize("echo a\\ b", _env()).arguments == ["echo", "a b"]

    def test_escaped_backslash(self) -> None:
        """A double backslash yields one backslash."""
        assert tokenize("echo a\\\\b", _env()).arguments == ["echo", "a\\b"]

    def test_escaped_dollar(self) -> None:
        """An escaped dollar sign does not start a variable."""
        assert tokenize("echo \\$HOME", _env()).arguments == ["echo", "$HOME"]


class TestVariables:
    """Verify $VAR expansion."""

    def test_defined_variable(self) -> None:
        """A defined variable expands to its value."""
        assert tokenize("echo $USER", _env(USER="alice")).arguments == ["echo", "alice"]

    def test_undefined_variable_is_empty(self) -> None:
        """An undefined variable expands to an empty argument."""
        assert tokenize("echo $UNSET", _env()).arguments == ["echo", ""]

    def test_bare_dollar_at_end(self) -> None:
        """A lone dollar at the end of the line stays a literal dollar."""
        assert tokenize("echo $", _env()).arguments == ["echo", "$"]

    def test_bare_dollar_mid_line(self) -> None:
        """A lone dollar followed by a space stays a literal dollar."""
        assert tokenize("echo $ x", _env()).arguments == ["echo", "$", "x"]

    def test_variable_inside_quotes(self) -> None:
        """Variables are expanded inside quotes as well."""
        assert tokenize('echo "$USER"', _env(USER="bob")).arguments == ["echo", "bob"]

    def test_status_variable(self) -> None:
        """Punctuation names such as ? are valid variable names."""
        assert tokenize("echo $?", _env(**{"?": "127"})).arguments == ["echo", "127"]

    def test_works_with_plain_mapping(self) -> None:
        """A plain dict can serve as the environment."""
        assert tokenize("echo $A", {"A": "1"}).arguments == ["echo", "1"]


class TestHomeExpansion:
    """Verify ~ expansion."""

    def test_bare_tilde(self) -> None:
        """A lone tilde expands to HOME."""
        assert tokenize("cd ~", _env()).arguments == ["cd", "/home/user"]

    def test_tilde_at_end_without_space(self) -> None:
        """A tilde closing the line expands to HOME."""
        assert tokenize("~", _env()).arguments == ["/home/user"]

    def test_tilde_prefix(self) -> None:
        """Text after the tilde is appended to HOME."""
        assert tokenize("cd ~/docs", _env()).arguments == ["cd", "/home/user/docs"]

    def test_tilde_mid_word_is_literal(self) -> None:
        """A tilde that does not start a word is kept as is."""
        assert tokenize("echo a~b", _env()).arguments == ["echo", "a~b"]

    def test_missing_home(self) -> None:
        """Without HOME a bare tilde becomes an empty argument."""
        assert tokenize("echo ~", Environment()).arguments == ["echo", ""]


class TestIncompleteLines:
    """Verify detection of lines needing more input."""

    def test_open_quote_is_incomplete(self) -> None:
        """An unmatched quote marks the line incomplete."""
        assert tokenize('echo "abc', _env()).incomplete is True

    def test_trailing_backslash_is_incomplete(self) -> None:
        """A trailing backslash marks the line incomplete."""
        assert tokenize("echo abc\\", _env()).incomplete is True

    def test_closed_quote_is_complete(self) -> None:
        """A matched quote leaves the line complete."""
        assert tokenize('echo "abc"', _env()).incomplete is False

    def test_continued_quote(self) -> None:
        """A quote spanning a newline keeps the newline in the word."""
        parsed = tokenize('echo "abc\ndef"', _env())
        assert parsed.incomplete is False
        assert parsed.arguments == ["echo", "abc\ndef"]

    def test_continued_escape(self) -> None:
        """An escaped newline joins the two physical lines."""
        parsed = tokenize("echo abc\\\ndef", _env())
        assert parsed.incomplete is False
        assert parsed.arguments == ["echo", "abc\ndef"]

    def test_require_complete_returns_arguments(self) -> None:
        """A complete line hands back its arguments."""
        assert tokenize("a b", _env()).require_complete() == ["a", "b"]

    def test_require_complete_raises(self) -> None:
        """An incomplete line raises IncompleteInputError."""
        with pytest.raises(IncompleteInputError):
            tokenize("'open", _env()).require_complete()

    def test_parsed_line_defaults(self) -> None:
        """A default ParsedLine is empty and complete."""
        assert ParsedLine() == ParsedLine(arguments=[], incomplete=False)
