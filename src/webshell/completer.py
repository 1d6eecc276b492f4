"""Context-aware tab completer for the shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the input
context and returns a list of candidate strings:

    - first word → command names,
    - ``$`` prefix → environment variable names,
    - anything else → virtual paths (directories get a trailing ``/``).
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from webshell.paths import PathKind, children, classify, resolve

if TYPE_CHECKING:
    from webshell.shell import Shell


class Completer:
    """Context-aware tab completer for a shell session."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The session whose commands, environment and paths
                   are used to generate completion candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        if text.startswith("$"):
            return self._complete_dollar_vars(text)

        return self._complete_paths(text)

    # -- private completers ------------------------------------------------

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the registry."""
        return sorted(name for name in self._shell.command_names if name.startswith(text))

    def _complete_dollar_vars(self, text: str) -> list[str]:
        """Complete $VAR references with the dollar prefix."""
        prefix = text[1:]
        items = self._shell.state.environment.items()
        return sorted(f"${key}" for key, _val in items if key.startswith(prefix))

    def _complete_paths(self, text: str) -> list[str]:
        """Complete virtual paths relative to the working directory.

        Split the partial path into a directory and a name prefix, list
        the directory's children from the state's path sets, and filter
        by prefix.  Directories get a trailing ``/`` suffix.
        """
        state = self._shell.state
        last_slash = text.rfind("/")
        typed_dir = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        directory = resolve(state.working_directory, typed_dir or ".")
        if classify(directory, state) is not PathKind.DIRECTORY:
            return []

        dirs = set(children(directory, state.directories))
        names = dirs | set(children(directory, state.files))
        return sorted(
            f"{typed_dir}{name}/" if name in dirs else f"{typed_dir}{name}"
            for name in names
            if name.startswith(prefix)
        )
