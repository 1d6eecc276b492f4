"""Built-in commands.

Each built-in is a plain ``(state, options, args) -> status`` function
wrapped into a record by ``make_command``.  Commands that need more than
the shell state (``help`` needs the registry, ``history`` the history
buffer, ``log`` the audit log) are built by closures in
``builtin_commands``.

Failures are raised as ``ShellError`` subclasses; ``exec_command`` turns
them into ``<name>: <message>`` lines and exit statuses.  Commands that
take several operands (``ls``, ``mkdir``, ``touch``) report each failing
operand themselves and go on with the rest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from webshell.commands import (
    Command,
    alias,
    make_command,
    reject_options,
    usage_help,
)
from webshell.errors import (
    EXIT_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    BlockedError,
    NotFoundError,
    ShellError,
    UsageError,
)
from webshell.paths import PathKind, children, classify, resolve

if TYPE_CHECKING:
    from webshell.dispatcher import CommandRegistry
    from webshell.history import HistoryBuffer
    from webshell.logging import Logger
    from webshell.state import ShellState


# -- Session commands -------------------------------------------------------


def _cmd_clear(state: ShellState, options: list[str], _args: list[str]) -> int:
    """Clear the terminal screen."""
    reject_options(options)
    state.output.clear()
    return EXIT_SUCCESS


def _cmd_exit(state: ShellState, options: list[str], _args: list[str]) -> int:
    """Close the session; the editor ignores all further input."""
    reject_options(options)
    state.closed = True
    state.output.clear()
    return EXIT_SUCCESS


def _cmd_echo(state: ShellState, _options: list[str], args: list[str]) -> int:
    """Echo arguments back as output."""
    state.write_line(" ".join(args))
    return EXIT_SUCCESS


# -- Environment commands ---------------------------------------------------


def _cmd_env(state: ShellState, options: list[str], _args: list[str]) -> int:
    """List all environment variables."""
    reject_options(options)
    for key, value in sorted(state.environment.items()):
        state.write_line(f"{key}={value}")
    return EXIT_SUCCESS


def _cmd_export(state: ShellState, options: list[str], args: list[str]) -> int:
    """Set environment variables from ``KEY=VALUE`` arguments."""
    reject_options(options)
    if not args:
        msg = "usage: export KEY=VALUE..."
        raise UsageError(msg)
    for pair in args:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"'{pair}': not a valid assignment"
            raise UsageError(msg)
        state.environment.set(key, value)
    return EXIT_SUCCESS


def _cmd_unset(state: ShellState, options: list[str], args: list[str]) -> int:
    """Remove environment variables."""
    reject_options(options)
    if not args:
        msg = "usage: unset KEY..."
        raise UsageError(msg)
    for key in args:
        try:
            state.environment.delete(key)
        except KeyError:
            msg = f"{key}: not set"
            raise ShellError(msg) from None
    return EXIT_SUCCESS


# -- Filesystem commands ----------------------------------------------------


def _cmd_pwd(state: ShellState, options: list[str], _args: list[str]) -> int:
    """Print the working directory."""
    reject_options(options)
    state.write_line(state.working_directory)
    return EXIT_SUCCESS


def _cmd_cd(state: ShellState, options: list[str], args: list[str]) -> int:
    """Change the working directory (``HOME`` when no argument is given)."""
    reject_options(options)
    if len(args) > 1:
        msg = "too many arguments"
        raise UsageError(msg)
    target = args[0] if args else state.home
    path = resolve(state.working_directory, target)
    kind = classify(path, state)
    if kind is PathKind.FILE:
        msg = f"{target}: Not a directory"
        raise BlockedError(msg)
    if kind is PathKind.NOT_FOUND:
        msg = f"{target}: No such file or directory"
        raise NotFoundError(msg)
    state.change_directory(path)
    return EXIT_SUCCESS


def _cmd_ls(state: ShellState, options: list[str], args: list[str]) -> int:
    """List directory contents; directories are suffixed with ``/``."""
    reject_options(options)
    targets = args or ["."]
    status = EXIT_SUCCESS
    for target in targets:
        path = resolve(state.working_directory, target)
        kind = classify(path, state)
        if kind is PathKind.NOT_FOUND:
            state.write_line(f"ls: cannot access '{target}': No such file or directory")
            status = EXIT_NOT_FOUND
            continue
        if kind is PathKind.FILE:
            state.write_line(target)
            continue
        if len(targets) > 1:
            state.write_line(f"{target}:")
        dirs = set(children(path, state.directories))
        names = sorted(dirs | set(children(path, state.files)))
        for name in names:
            state.write_line(f"{name}/" if name in dirs else name)
    return status


def _cmd_mkdir(state: ShellState, options: list[str], args: list[str]) -> int:
    """Create directories (``-p`` creates parents and ignores existing ones).

    A failing operand is reported and the rest are still created; the
    status is that of the last failure.
    """
    reject_options(options, allowed=("p", "parents"))
    parents = bool(options)
    if not args:
        msg = "missing operand"
        raise UsageError(msg)
    status = EXIT_SUCCESS
    for target in args:
        path = resolve(state.working_directory, target)
        kind = classify(path, state)
        if kind is PathKind.DIRECTORY and parents:
            continue
        if kind is not PathKind.NOT_FOUND:
            reason, failed = "File exists", EXIT_FAILURE
        else:
            try:
                state.add_directory(path, parents=parents)
            except NotFoundError as e:
                reason, failed = "No such file or directory", e.status
            except BlockedError as e:
                reason, failed = "Not a directory", e.status
            else:
                continue
        state.write_line(f"mkdir: cannot create directory '{target}': {reason}")
        status = failed
    return status


def _cmd_touch(state: ShellState, options: list[str], args: list[str]) -> int:
    """Create empty files; existing paths are left alone."""
    reject_options(options)
    if not args:
        msg = "missing file operand"
        raise UsageError(msg)
    status = EXIT_SUCCESS
    for target in args:
        path = resolve(state.working_directory, target)
        if classify(path, state) is not PathKind.NOT_FOUND:
            continue
        try:
            state.add_file(path)
        except NotFoundError as e:
            state.write_line(f"touch: cannot touch '{target}': No such file or directory")
            status = e.status
        except BlockedError as e:
            state.write_line(f"touch: cannot touch '{target}': Not a directory")
            status = e.status
    return status


# -- Registration -----------------------------------------------------------


def builtin_commands(
    *,
    registry: CommandRegistry,
    history: HistoryBuffer,
    logger: Logger,
) -> list[Command]:
    """Return every built-in command record in registration order.

    Args:
        registry: Consulted by ``help`` for the command list.
        history: Shown by ``history``.
        logger: Shown by ``log``.

    """

    def _cmd_help(state: ShellState, _options: list[str], args: list[str]) -> int:
        """List commands, or show help for one command."""
        if not args:
            state.write_line("Available commands: ")
            seen: set[str] = set()
            for command in registry:
                if command.name in seen:
                    continue
                seen.add(command.name)
                state.write_line(f"\t{command.name}: {command.description()}")
            state.write_line("Try 'help <command>' for more detailed information.")
            return EXIT_SUCCESS
        if len(args) == 1:
            return registry.lookup(args[0]).on_help(state)
        msg = "Invalid options"
        raise UsageError(msg)

    def _cmd_history(state: ShellState, options: list[str], _args: list[str]) -> int:
        """Show submitted lines, numbered from 1."""
        reject_options(options)
        for i, line in enumerate(history.entries):
            state.write_line(f"  {i + 1}  {line}")
        return EXIT_SUCCESS

    def _cmd_log(state: ShellState, options: list[str], _args: list[str]) -> int:
        """Show the session audit log."""
        reject_options(options)
        entries = logger.entries
        if not entries:
            state.write_line("No log entries.")
        for entry in entries:
            state.write_line(str(entry))
        return EXIT_SUCCESS

    ls = make_command(
        "ls",
        _cmd_ls,
        on_help=usage_help("ls [path...]", "List directory contents."),
        summary="list directory contents",
    )
    return [
        make_command(
            "cd",
            _cmd_cd,
            on_help=usage_help("cd [dir]", "Change the working directory (default: $HOME)."),
            summary="change the working directory",
        ),
        make_command(
            "clear",
            _cmd_clear,
            on_help=usage_help("clear", "Clear the terminal screen."),
            summary="clear terminal screen",
        ),
        alias(ls, "dir"),
        make_command(
            "echo",
            _cmd_echo,
            on_help=usage_help("echo [word...]", "Write the words separated by spaces."),
            summary="display a line of text",
        ),
        make_command(
            "env",
            _cmd_env,
            on_help=usage_help("env", "List all environment variables."),
            summary="list environment variables",
        ),
        make_command(
            "exit",
            _cmd_exit,
            on_help=usage_help("exit", "Close the current session."),
            summary="exit current session",
        ),
        make_command(
            "export",
            _cmd_export,
            on_help=usage_help("export KEY=VALUE...", "Set environment variables."),
            summary="set environment variables",
        ),
        make_command(
            "help",
            _cmd_help,
            on_help=usage_help("help [command]", "List commands or describe one command."),
            summary="get available commands",
        ),
        make_command(
            "history",
            _cmd_history,
            on_help=usage_help("history", "Show previously submitted lines."),
            summary="show command history",
        ),
        make_command(
            "log",
            _cmd_log,
            on_help=usage_help("log", "Show the session audit log."),
            summary="show session log",
        ),
        ls,
        make_command(
            "mkdir",
            _cmd_mkdir,
            on_help=usage_help(
                "mkdir [-p] dir...", "Create directories.", "  -p  create parents as needed"
            ),
            summary="make directories",
        ),
        make_command(
            "pwd",
            _cmd_pwd,
            on_help=usage_help("pwd", "Print the working directory."),
            summary="print working directory",
        ),
        make_command(
            "touch",
            _cmd_touch,
            on_help=usage_help("touch file...", "Create empty files."),
            summary="create empty files",
        ),
        make_command(
            "unset",
            _cmd_unset,
            on_help=usage_help("unset KEY...", "Remove environment variables."),
            summary="remove environment variables",
        ),
    ]
