"""Commands — capability records and the default execution protocol.

A command is a small immutable record rather than a class hierarchy:

    - ``name``        — the word that invokes it (aliases are just
      more records with a different name and the same handlers),
    - ``on_exec``     — ``(state, options, args) -> status``,
    - ``on_help``     — ``(state) -> status``,
    - ``summary``     — one line shown by ``help``.

``exec_command`` is the protocol every command shares:

1. ``name --help`` (exactly two words) goes straight to ``on_help``.
2. Otherwise the words after the name are split by shape: ``--long``
   contributes ``long``, ``-pv`` contributes ``p`` and ``v``, anything
   else is a positional argument.
3. ``on_exec`` runs with the two lists.

It is also the error boundary: a ``ShellError`` becomes one line of
output plus its status, and any other exception becomes one line plus
status 1.  Nothing escapes to the caller.

``unknown_command`` builds the fallback record used when no registered
command matches.  It handles bare ``KEY=VALUE`` assignments and reports
missing commands and paths with the usual 126/127 statuses.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from webshell.errors import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    BlockedError,
    NotFoundError,
    ShellError,
    UsageError,
)
from webshell.paths import PathKind, classify, looks_like_path, resolve

if TYPE_CHECKING:
    from webshell.state import ShellState

ExecHandler: TypeAlias = "Callable[[ShellState, list[str], list[str]], int]"
HelpHandler: TypeAlias = "Callable[[ShellState], int]"

HELP_FLAG = "--help"
_DEFAULT_DESCRIPTION = "No description available for this command"


def _default_help(state: ShellState) -> int:
    state.write_line("This command does not provide any help messages.")
    return EXIT_SUCCESS


@dataclass(frozen=True)
class Command:
    """A named command and its handlers."""

    name: str
    on_exec: ExecHandler
    on_help: HelpHandler = _default_help
    summary: str = ""

    def description(self) -> str:
        """Return the summary, or a stock message when there is none."""
        return self.summary or _DEFAULT_DESCRIPTION

    def exec(self, state: ShellState, args: list[str]) -> int:
        """Run the command with its full argument vector (name first)."""
        return exec_command(self, state, args)


def make_command(
    name: str,
    on_exec: ExecHandler,
    *,
    on_help: HelpHandler | None = None,
    summary: str = "",
) -> Command:
    """Build a command record.

    Args:
        name: The invoking word.
        on_exec: Handler for a normal invocation.
        on_help: Handler for ``name --help``; a stock message if omitted.
        summary: One-line description for ``help``.

    """
    return Command(
        name=name,
        on_exec=on_exec,
        on_help=on_help if on_help is not None else _default_help,
        summary=summary,
    )


def alias(command: Command, name: str) -> Command:
    """Return a copy of *command* invoked by *name*."""
    return dataclasses.replace(command, name=name)


def usage_help(usage: str, *details: str) -> HelpHandler:
    """Build an ``on_help`` handler that prints a usage line and details."""

    def _help(state: ShellState) -> int:
        state.write_line(f"Usage: {usage}")
        for line in details:
            state.write_line(line)
        return EXIT_SUCCESS

    return _help


def split_options(words: list[str]) -> tuple[list[str], list[str]]:
    """Split words into option names and positional arguments.

    Examples::

        ["-pv", "a"]         → (["p", "v"], ["a"])
        ["--verbose", "b"]   → (["verbose"], ["b"])

    """
    options: list[str] = []
    positional: list[str] = []
    for word in words:
        if word.startswith("--"):
            options.append(word[2:])
        elif word.startswith("-"):
            options.extend(word[1:])
        else:
            positional.append(word)
    return options, positional


def reject_options(options: list[str], *, allowed: tuple[str, ...] = ()) -> None:
    """Raise a usage error for the first option not in *allowed*.

    Raises:
        UsageError: If an unsupported option is present.

    """
    for option in options:
        if option not in allowed:
            msg = f"invalid option '{option}'"
            raise UsageError(msg)


def exec_command(command: Command, state: ShellState, args: list[str]) -> int:
    """Run *command* with the full argument vector, converting failures.

    Args:
        command: The resolved command.
        state: The session state.
        args: All words of the line, the command name first.

    Returns:
        The command's exit status.

    """
    try:
        if len(args) == 2 and args[1] == HELP_FLAG:  # noqa: PLR2004
            return command.on_help(state)
        options, positional = split_options(args[1:])
        return command.on_exec(state, options, positional)
    except ShellError as e:
        state.write_line(f"{command.name}: {e}")
        return e.status
    except Exception as e:  # noqa: BLE001
        state.write_line(f"{command.name}: {e}")
        return EXIT_FAILURE


def unknown_command(name: str) -> Command:
    """Build the fallback record for a name with no registered command."""

    def _exec(state: ShellState, options: list[str], args: list[str]) -> int:
        key, sep, value = name.partition("=")
        if sep and key and not options and not args:
            state.environment.set(key, value)
            return EXIT_SUCCESS
        if looks_like_path(name):
            kind = classify(resolve(state.working_directory, name), state)
            if kind is PathKind.DIRECTORY:
                msg = "Is a directory"
                raise BlockedError(msg)
            if kind is PathKind.FILE:
                msg = "Permission denied"
                raise BlockedError(msg)
            msg = "No such file or directory"
            raise NotFoundError(msg)
        msg = "command not found"
        raise NotFoundError(msg)

    return make_command(name, _exec)
