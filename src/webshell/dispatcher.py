"""Command registry and dispatcher.

The registry is an ordered list of command records.  Lookup is by exact
name and the first match wins, so registering two records under one
name is allowed (the later one is simply shadowed).  A name with no
match resolves to the ``unknown_command`` fallback rather than ``None``,
so the dispatcher never needs a special case for it.

The dispatcher takes the tokenized words of one line, resolves the first
word, and hands the full vector to the command's ``exec``.  Every
dispatch is recorded in the session log.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from webshell.commands import Command, unknown_command
from webshell.errors import EXIT_SUCCESS
from webshell.logging import Logger, LogLevel

if TYPE_CHECKING:
    from webshell.state import ShellState


class CommandRegistry:
    """Ordered collection of command records."""

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        """Create a registry, optionally pre-populated."""
        self._commands: list[Command] = []
        for command in commands:
            self.register(command)

    def register(self, command: Command) -> None:
        """Add *command*; an earlier record with the same name takes precedence."""
        self._commands.append(command)

    def find(self, name: str) -> Command | None:
        """Return the first command called *name*, or None."""
        for command in self._commands:
            if command.name == name:
                return command
        return None

    def lookup(self, name: str) -> Command:
        """Return the first command called *name*, or the unknown-command fallback."""
        command = self.find(name)
        return command if command is not None else unknown_command(name)

    @property
    def names(self) -> list[str]:
        """Return the distinct command names in registration order."""
        return list(dict.fromkeys(c.name for c in self._commands))

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


class Dispatcher:
    """Resolve the first word of a line and run the matching command."""

    def __init__(self, registry: CommandRegistry, *, logger: Logger | None = None) -> None:
        """Create a dispatcher over *registry*.

        Args:
            registry: Where command names are resolved.
            logger: Optional audit log for dispatched commands.

        """
        self._registry = registry
        self._logger = logger

    @property
    def registry(self) -> CommandRegistry:
        """Return the registry commands are resolved against."""
        return self._registry

    def dispatch(self, state: ShellState, args: list[str]) -> int:
        """Run the command named by ``args[0]``.

        Args:
            state: The session state passed to the command.
            args: The tokenized line, command name first.

        Returns:
            The command's exit status (0 for an empty vector).

        """
        if not args:
            return EXIT_SUCCESS
        command = self._registry.lookup(args[0])
        status = command.exec(state, args)
        if self._logger is not None:
            level = LogLevel.INFO if status == EXIT_SUCCESS else LogLevel.WARNING
            self._logger.log(level, " ".join(args), source="dispatcher", status=status)
        return status
