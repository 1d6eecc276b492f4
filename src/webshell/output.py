"""Output sinks — where command output goes.

The core never knows how text reaches the screen.  It talks to an
``OutputSink`` with two operations:

    - ``write(text)`` — append text (callers include their own newlines).
    - ``clear()``     — wipe the screen.

``BufferSink`` captures output in memory (used by ``Shell.execute``,
the web UI and the tests); ``StreamSink`` writes straight to a text
stream such as ``sys.stdout`` for the interactive REPL.
"""

import sys
from typing import Protocol, TextIO

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


class OutputSink(Protocol):
    """Anything that can display shell output."""

    def write(self, text: str) -> None:
        """Append *text* to the display."""
        ...

    def clear(self) -> None:
        """Wipe the display."""
        ...


class BufferSink:
    """Collect output in memory.

    ``clear()`` discards everything written so far and sets the
    ``cleared`` flag so a front end knows to wipe its own screen.
    """

    def __init__(self) -> None:
        """Create an empty buffer."""
        self._chunks: list[str] = []
        self.cleared = False

    def write(self, text: str) -> None:
        """Append *text* to the buffer."""
        self._chunks.append(text)

    def clear(self) -> None:
        """Discard buffered text and remember that a clear happened."""
        self._chunks.clear()
        self.cleared = True

    @property
    def text(self) -> str:
        """Return everything written since the last clear or drain."""
        return "".join(self._chunks)

    def drain(self) -> str:
        """Return the buffered text and reset the buffer and flag."""
        text = self.text
        self._chunks.clear()
        self.cleared = False
        return text


class StreamSink:
    """Write output directly to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Attach to *stream* (defaults to ``sys.stdout``)."""
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write *text* and flush so prompts appear immediately."""
        self._stream.write(text)
        self._stream.flush()

    def clear(self) -> None:
        """Clear the terminal with ANSI escapes."""
        self.write(CLEAR_SCREEN)
