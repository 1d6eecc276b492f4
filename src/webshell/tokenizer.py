"""Line tokenizer — turns one raw input line into argument strings.

The tokenizer is a single left-to-right scan with four flags:

    - ``escaped``  — the previous character was a backslash; take the
      next character literally.
    - ``quoted``   — inside a quote.  ``"`` and ``'`` are the same
      toggle: either one opens or closes quoting, and the quote
      characters themselves are never part of the token.
    - ``variable`` — a ``$`` was seen; when the token ends, the whole
      accumulated text is used as a variable name and replaced by its
      value (empty if undefined).
    - ``home``     — a ``~`` started the token; when the token ends,
      ``$HOME`` is prepended to whatever followed it.

Whitespace (any character up to ``0x20``) outside quotes ends a token.
A token with no text but a pending ``$`` becomes a literal ``"$"``; one
with a pending ``~`` becomes the home directory.

If the line ends inside a quote or right after a backslash the result is
*incomplete*: the caller should keep the line, add a newline, and
tokenize again once more input arrives.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from webshell.errors import IncompleteInputError

_QUOTES = frozenset("\"'")
_SPACE_MAX = 0x20


class _VariableSource(Protocol):
    def get(self, key: str, default: str) -> str | None: ...


@dataclass(frozen=True)
class ParsedLine:
    """The result of tokenizing one line."""

    arguments: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    incomplete: bool = False

    def require_complete(self) -> list[str]:
        """Return the arguments, or raise if more input is needed.

        Raises:
            IncompleteInputError: If the line ended in a quote or escape.

        """
        if self.incomplete:
            msg = "unexpected end of input"
            raise IncompleteInputError(msg)
        return self.arguments


class _Scanner:
    """Mutable scan state for one call to ``tokenize``."""

    def __init__(self, environment: _VariableSource | Mapping[str, str]) -> None:
        self.environment = environment
        self.arguments: list[str] = []
        self.buffer: list[str] = []
        self.escaped = False
        self.quoted = False
        self.variable = False
        self.home = False

    def lookup(self, name: str) -> str:
        return self.environment.get(name, "") or ""

    def feed(self, ch: str) -> None:
        if self.escaped:
            self.buffer.append(ch)
            self.escaped = False
        elif not self.quoted and ord(ch) <= _SPACE_MAX:
            self.flush()
        elif ch == "\\":
            self.escaped = True
        elif ch in _QUOTES:
            self.quoted = not self.quoted
        elif ch == "$":
            self.variable = True
        elif ch == "~" and not self.quoted and not self.home and self._at_token_start():
            self.home = True
        else:
            self.buffer.append(ch)

    def flush(self) -> None:
        text = "".join(self.buffer)
        if text:
            if self.variable:
                text = self.lookup(text)
            if self.home:
                text = self.lookup("HOME") + text
            self.arguments.append(text)
        elif self.variable:
            self.arguments.append("$")
        elif self.home:
            self.arguments.append(self.lookup("HOME"))
        self.buffer.clear()
        self.variable = False
        self.home = False

    def _at_token_start(self) -> bool:
        return not self.buffer and not self.variable


def tokenize(raw: str, environment: _VariableSource | Mapping[str, str]) -> ParsedLine:
    """Split *raw* into arguments, expanding variables and ``~``.

    Args:
        raw: One input line, possibly holding earlier continuation lines
            joined with ``\\n``.
        environment: Where ``$NAME`` and ``HOME`` are looked up.

    Returns:
        The arguments and whether the line is incomplete.

    """
    scanner = _Scanner(environment)
    for ch in raw:
        scanner.feed(ch)
    scanner.flush()
    return ParsedLine(
        arguments=scanner.arguments,
        incomplete=scanner.quoted or scanner.escaped,
    )
