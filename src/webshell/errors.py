"""Error taxonomy and exit codes for the shell.

Every command returns a small integer status.  Unix shells agree on a
handful of conventional values, and scripts (and people) rely on them:

    - ``0``   — success.
    - ``1``   — usage error: a malformed or unsupported option.
    - ``126`` — the target exists but cannot be used that way
      ("permission denied", "is a directory").
    - ``127`` — the command or path was not found.

Handlers signal failure by raising a ``ShellError`` subclass.  The
command boundary (``webshell.commands.exec_command``) catches it, writes
one human-readable line, and returns the carried status, so no error
ever escapes into the editor loop.

``IncompleteInputError`` is different: an unterminated quote or a
trailing backslash is not a failure, just a request for more input.
It carries no status.
"""

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_FAILURE = 1
EXIT_BLOCKED = 126
EXIT_NOT_FOUND = 127


class ShellError(Exception):
    """Base class for errors that map onto an exit status."""

    status: int = EXIT_FAILURE

    def __init__(self, message: str, *, status: int | None = None) -> None:
        """Create an error with a message and optional status override.

        Args:
            message: The line shown to the user (without command prefix).
            status: Exit status to report; defaults to the class value.

        """
        super().__init__(message)
        if status is not None:
            self.status = status


class UsageError(ShellError):
    """Malformed or unsupported option or argument."""

    status = EXIT_USAGE


class BlockedError(ShellError):
    """The path exists but the operation is not allowed on it."""

    status = EXIT_BLOCKED


class NotFoundError(ShellError):
    """Unknown command or missing path."""

    status = EXIT_NOT_FOUND


class IncompleteInputError(Exception):
    """The line ends inside a quote or after a trailing escape."""
