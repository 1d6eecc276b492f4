"""The shell — one session of the command interpreter.

``Shell`` owns everything a session needs and wires it together:

    - the ``ShellState`` (working directory, environment, paths),
    - the ``CommandRegistry`` populated with the built-ins,
    - the ``Dispatcher`` that resolves and runs commands,
    - the ``HistoryBuffer`` of submitted lines,
    - the audit ``Logger``.

It offers two ways in:

    - ``run_line(text)`` — tokenize and dispatch one logical line, the
      primitive the line editor calls on submit.
    - ``execute(command)`` — the string-in, string-out convenience used
      by the REPL, the web UI and the tests.  It keeps a continuation
      buffer, so an unterminated quote simply waits for the next call.

Design choices:
    - **Returns strings, not prints.**  ``execute`` captures output in a
      ``BufferSink`` so callers decide how to display it.
    - **Every status lands in the state.**  After each dispatch the
      status is stored as ``last_exit_status`` and in ``$?``.
"""

from webshell.builtins import builtin_commands
from webshell.commands import Command
from webshell.config import ShellConfig
from webshell.dispatcher import CommandRegistry, Dispatcher
from webshell.errors import IncompleteInputError
from webshell.history import HistoryBuffer
from webshell.logging import Logger, LogLevel
from webshell.output import BufferSink, OutputSink
from webshell.state import ShellState
from webshell.tokenizer import tokenize


class Shell:
    """A shell session over an in-memory pseudo-filesystem."""

    def __init__(
        self,
        *,
        config: ShellConfig | None = None,
        output: OutputSink | None = None,
        commands: list[Command] | None = None,
    ) -> None:
        """Create a session.

        Args:
            config: Startup settings; defaults to ``ShellConfig()``.
            output: Where commands write; defaults to a ``BufferSink``.
            commands: Extra commands registered after the built-ins.

        """
        self._config = config if config is not None else ShellConfig()
        self._output: OutputSink = output if output is not None else BufferSink()
        self._logger = Logger()
        self._history = HistoryBuffer()
        self._state = ShellState.from_config(self._config, output=self._output)
        self._registry = CommandRegistry()
        for command in builtin_commands(
            registry=self._registry, history=self._history, logger=self._logger
        ):
            self._registry.register(command)
        for command in commands or ():
            self._registry.register(command)
        self._dispatcher = Dispatcher(self._registry, logger=self._logger)
        self._pending = ""
        self._logger.log(LogLevel.INFO, "Session started", source="shell")

    @property
    def config(self) -> ShellConfig:
        """Return the startup settings."""
        return self._config

    @property
    def state(self) -> ShellState:
        """Return the session state."""
        return self._state

    @property
    def registry(self) -> CommandRegistry:
        """Return the command registry."""
        return self._registry

    @property
    def history(self) -> HistoryBuffer:
        """Return the history buffer."""
        return self._history

    @property
    def logger(self) -> Logger:
        """Return the session audit log."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return the registered command names."""
        return self._registry.names

    @property
    def closed(self) -> bool:
        """Return True once ``exit`` has run."""
        return self._state.closed

    @property
    def pending(self) -> str:
        """Return the continuation text waiting for more input."""
        return self._pending

    def run_line(self, text: str) -> int | None:
        """Tokenize and dispatch one logical line.

        Args:
            text: The full line, earlier continuation lines included.

        Returns:
            The exit status, or None if the line is incomplete (nothing
            was dispatched or recorded).

        """
        parsed = tokenize(text, self._state.environment)
        if parsed.incomplete:
            return None
        self._history.append(text)
        status = self._dispatcher.dispatch(self._state, parsed.arguments)
        self._state.record_status(status)
        if self._state.closed:
            self._logger.log(LogLevel.INFO, "Session closed", source="shell")
        return status

    def execute(self, command: str) -> str:
        """Run one line of input and return its output.

        An incomplete line is kept and joined (with a newline) to the
        next call; it returns an empty string meanwhile.

        Args:
            command: The raw input line.

        Returns:
            Everything the command wrote, or ``""`` when nothing ran.

        """
        if self._state.closed:
            return ""
        text = self._pending + command
        if not text.strip():
            return ""
        status = self.run_line(text)
        if status is None:
            self._pending = text + "\n"
            return ""
        self._pending = ""
        return self._drain()

    def run_script(self, script: str) -> list[str]:
        """Execute a multi-line script, returning output from each command.

        Blank lines and ``#`` comments are skipped; a quote left open on
        one line continues onto the next.

        Raises:
            IncompleteInputError: If the script ends inside a quote or
                after a trailing backslash.

        """
        results: list[str] = []
        for line in script.splitlines():
            if not self._pending and line.strip().startswith("#"):
                continue
            was_pending = bool(self._pending)
            output = self.execute(line)
            if self._pending or (not line.strip() and not was_pending):
                continue
            results.append(output)
            if self._state.closed:
                break
        if self._pending:
            self._pending = ""
            self._logger.log(LogLevel.ERROR, "Script ended inside a quote", source="shell")
            msg = "script ended inside a quote or escape"
            raise IncompleteInputError(msg)
        return results

    def _drain(self) -> str:
        """Return and reset captured output when writing to a buffer."""
        if isinstance(self._output, BufferSink):
            return self._output.drain().rstrip("\n")
        return ""
