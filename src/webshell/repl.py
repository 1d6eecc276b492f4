"""Interactive REPL (Read-Eval-Print Loop) for the shell.

The REPL is the terminal front end.  It creates a session and enters
the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until ``exit`` closes the session.

A line that ends inside a quote is continued on the next read with a
``> `` prompt, like a real shell.  The helper functions are pure and
testable; ``run()`` is the I/O entrypoint.
"""

import readline

from webshell.completer import Completer
from webshell.editor import CONTINUATION_PROMPT
from webshell.shell import Shell

_BANNER_WIDTH = 38


def format_banner(shell: Shell) -> str:
    """Return the start-up banner.

    Args:
        shell: The session being started.

    Returns:
        A formatted string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    name = shell.config.prompt
    return (
        f"\n  {border}\n  {name:^{_BANNER_WIDTH}}\n  {border}\n\n"
        "Type 'help' for commands, 'exit' to quit.\n"
    )


def build_prompt(shell: Shell) -> str:
    """Return the prompt for the next read.

    Returns:
        The session prompt, or the continuation prompt while a quoted
        line is still open.

    """
    if shell.pending:
        return CONTINUATION_PROMPT
    return shell.config.plain_prompt()


def run() -> None:
    """Start a session and run the interactive REPL.

    Handles tab completion via readline, graceful Ctrl+C and Ctrl+D,
    and stops once the session is closed.
    """
    shell = Shell()

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(shell))  # noqa: T201

    try:
        while not shell.closed:
            try:
                line = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(line)
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Session closed.")  # noqa: T201
