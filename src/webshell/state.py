"""Session-wide mutable shell state.

One ``ShellState`` is created when a session starts and is passed by
reference to every command invocation.  It bundles everything commands
may read or mutate:

    - the working directory,
    - the environment (``HOME`` is always seeded),
    - the pseudo-filesystem: one set of file paths and one of directory
      paths,
    - the status of the last dispatched command (mirrored into ``$?``),
    - the output sink commands write to, and whether the session is
      closed.

Invariants:
    - ``"/"`` is always a directory.
    - ``working_directory`` is always a member of ``directories``.
    - ``files`` and ``directories`` are disjoint.

The mutators below keep these invariants; callers that poke the sets
directly are on their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from webshell.config import ShellConfig
from webshell.env import Environment
from webshell.errors import BlockedError, NotFoundError
from webshell.output import BufferSink, OutputSink
from webshell.paths import ROOT, PathKind, ancestors, classify, resolve

STATUS_VARIABLE = "?"


@dataclass
class ShellState:
    """Working directory, environment and pseudo-filesystem of a session."""

    working_directory: str = ROOT
    environment: Environment = field(default_factory=Environment)
    files: set[str] = field(default_factory=set)  # pyright: ignore[reportUnknownVariableType]
    directories: set[str] = field(default_factory=lambda: {ROOT})
    last_exit_status: int = 0
    output: OutputSink = field(default_factory=BufferSink)
    closed: bool = False

    @classmethod
    def from_config(cls, config: ShellConfig, *, output: OutputSink | None = None) -> ShellState:
        """Build the initial state for a session.

        Seed paths are normalized against the root, and seed directories
        and files get their parent chain registered so the tree is
        consistent from the start.

        Raises:
            ValueError: If the initial directory is not a seeded directory.

        """
        home = resolve(ROOT, config.home)
        env = Environment(initial=config.env)
        env.set("HOME", home)
        state = cls(environment=env)
        if output is not None:
            state.output = output
        for path in (home, *config.directories):
            state.add_directory(resolve(ROOT, path), parents=True)
        for raw in config.files:
            path = resolve(ROOT, raw)
            for ancestor in ancestors(path):
                state.add_directory(ancestor, parents=True)
            state.add_file(path)
        initial = resolve(ROOT, config.initial_directory)
        if initial not in state.directories:
            msg = f"initial directory {config.initial_directory!r} is not a directory"
            raise ValueError(msg)
        state.change_directory(initial)
        state.record_status(0)
        return state

    def add_directory(self, path: str, *, parents: bool = False) -> None:
        """Register *path* as a directory.

        Args:
            path: A normalized absolute path.
            parents: Also register every missing ancestor.

        Raises:
            BlockedError: If *path* or an ancestor is a file.
            NotFoundError: If the parent is missing and *parents* is False.

        """
        chain = ancestors(path)
        for ancestor in chain:
            kind = classify(ancestor, self)
            if kind is PathKind.FILE:
                msg = f"{ancestor}: Not a directory"
                raise BlockedError(msg)
            if kind is PathKind.NOT_FOUND:
                if not parents:
                    msg = f"{path}: No such file or directory"
                    raise NotFoundError(msg)
                self.directories.add(ancestor)
        if path in self.files:
            msg = f"{path}: Not a directory"
            raise BlockedError(msg)
        self.directories.add(path)

    def add_file(self, path: str) -> None:
        """Register *path* as a file.

        Raises:
            BlockedError: If *path* is already a directory.
            NotFoundError: If the parent directory does not exist.

        """
        if path in self.directories:
            msg = f"{path}: Is a directory"
            raise BlockedError(msg)
        chain = ancestors(path)
        kind = classify(chain[-1], self) if chain else PathKind.DIRECTORY
        if kind is PathKind.FILE:
            msg = f"{chain[-1]}: Not a directory"
            raise BlockedError(msg)
        if kind is PathKind.NOT_FOUND:
            msg = f"{path}: No such file or directory"
            raise NotFoundError(msg)
        self.files.add(path)

    def change_directory(self, path: str) -> None:
        """Switch the working directory and update ``PWD``.

        Raises:
            BlockedError: If *path* is a file.
            NotFoundError: If *path* does not exist.

        """
        kind = classify(path, self)
        if kind is PathKind.FILE:
            msg = f"{path}: Not a directory"
            raise BlockedError(msg)
        if kind is PathKind.NOT_FOUND:
            msg = f"{path}: No such file or directory"
            raise NotFoundError(msg)
        self.working_directory = path
        self.environment.set("PWD", path)

    def record_status(self, status: int) -> None:
        """Store the status of the last command, mirrored into ``$?``."""
        self.last_exit_status = status
        self.environment.set(STATUS_VARIABLE, str(status))

    @property
    def home(self) -> str:
        """Return the current value of ``HOME``."""
        return self.environment.lookup("HOME")

    def write_line(self, text: str = "") -> None:
        """Write one line of output."""
        self.output.write(text + "\n")
