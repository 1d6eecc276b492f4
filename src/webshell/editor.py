"""Line editor — the interactive state machine behind the prompt.

The editor turns discrete key events into edits of an input buffer and
submits finished lines to the shell.  It is independent of any keyboard
encoding: front ends translate their raw events into ``KeyEvent``
values first.

Modes:
    - ``IDLE_PROMPT`` — a fresh prompt is shown, nothing typed yet.
    - ``EDITING``     — a buffer and cursor are being edited.
    - ``CLOSED``      — ``exit`` ran; every further event is ignored
      and the prompt is never drawn again.

On submit the logical line (earlier continuation lines plus the current
buffer) is tokenized.  An incomplete line (open quote, trailing
backslash) is kept as continuation text and the editor moves to a new
physical line with the cursor at 0.  A complete line is recorded in
history and dispatched, and its status is stored in the shell state.

Bulk-pasted text arrives as a separate *data* event.  Terminals also
emit a data event echoing every key press, so data arriving within a
short guard interval after a key event is dropped.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from webshell.shell import Shell

CURSOR_LEFT = "\x1b[D"
CURSOR_RIGHT = "\x1b[C"
ERASE_LINE = "\x1b[2K\r"
CONTINUATION_PROMPT = "> "


class Key(Enum):
    """Logical keys understood by the editor."""

    SUBMIT = auto()
    BACKSPACE = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    HISTORY_UP = auto()
    HISTORY_DOWN = auto()
    INSERT = auto()


class EditorMode(Enum):
    """The editor's interaction state."""

    IDLE_PROMPT = "idle-prompt"
    EDITING = "editing"
    CLOSED = "closed"


@dataclass(frozen=True)
class KeyEvent:
    """One key press; ``text`` is only used by ``Key.INSERT``."""

    key: Key
    text: str = ""


class LineEditor:
    """Buffer, cursor and history navigation for one shell session."""

    def __init__(
        self,
        shell: Shell,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Attach an editor to *shell*.

        Args:
            shell: The session that runs submitted lines.
            clock: Time source for the paste guard (seconds).

        """
        self._shell = shell
        self._clock = clock
        self._guard = shell.config.guard_interval
        self._buffer: list[str] = []
        self._cursor = 0
        self._continuation = ""
        self._draft = ""
        self._last_key_at: float | None = None
        self._mode = EditorMode.IDLE_PROMPT

    # -- Inspection ---------------------------------------------------------

    @property
    def mode(self) -> EditorMode:
        """Return the current interaction state."""
        return self._mode

    @property
    def buffer(self) -> str:
        """Return the text on the current physical line."""
        return "".join(self._buffer)

    @property
    def cursor(self) -> int:
        """Return the cursor offset into the buffer."""
        return self._cursor

    @property
    def line(self) -> str:
        """Return the whole logical line, continuation text included."""
        return self._continuation + self.buffer

    @property
    def closed(self) -> bool:
        """Return True once the session has been closed."""
        return self._mode is EditorMode.CLOSED

    # -- Rendering ----------------------------------------------------------

    def prompt(self) -> None:
        """Draw a fresh prompt and empty the buffer (no-op once closed)."""
        if self.closed:
            return
        self._buffer.clear()
        self._cursor = 0
        self._continuation = ""
        self._draw_prompt()

    def render(self) -> str:
        """Return the prompt line as drawn, with cursor-left moves."""
        prompt = CONTINUATION_PROMPT if self._continuation else self._shell.config.styled_prompt()
        moves = CURSOR_LEFT * (len(self._buffer) - self._cursor)
        return f"{ERASE_LINE}{prompt}{self.buffer}{moves}"

    def _draw_prompt(self) -> None:
        prompt = CONTINUATION_PROMPT if self._continuation else self._shell.config.styled_prompt()
        self._write(f"{ERASE_LINE}{prompt}")

    def _sync_line(self) -> None:
        self._write(self.render())

    def _write(self, text: str) -> None:
        self._shell.state.output.write(text)

    # -- Events -------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> None:
        """Apply one key event."""
        if self.closed:
            return
        self._last_key_at = self._clock()
        if self._mode is EditorMode.IDLE_PROMPT:
            self._mode = EditorMode.EDITING
        handler = self._HANDLERS[event.key]
        handler(self, event)

    def handle_data(self, data: str) -> None:
        """Insert bulk-pasted *data* unless it echoes a recent key event."""
        if self.closed or not data:
            return
        if self._last_key_at is not None and self._clock() - self._last_key_at < self._guard:
            return
        self._mode = EditorMode.EDITING
        self._insert(data)
        self._sync_line()

    def _on_submit(self, _event: KeyEvent) -> None:
        self._write("\n")
        text = self.line
        if not text:
            self._cursor = 0
            self._draw_prompt()
            return
        status = self._shell.run_line(text)
        if status is None:
            self._continuation = text + "\n"
            self._buffer.clear()
            self._cursor = 0
            self._draw_prompt()
            return
        self._draft = ""
        if self._shell.closed:
            self._mode = EditorMode.CLOSED
            self._buffer.clear()
            self._cursor = 0
            self._continuation = ""
            return
        self._mode = EditorMode.IDLE_PROMPT
        self.prompt()

    def _on_backspace(self, _event: KeyEvent) -> None:
        if self._cursor == 0:
            return
        self._cursor -= 1
        del self._buffer[self._cursor]
        self._sync_line()

    def _on_left(self, _event: KeyEvent) -> None:
        if self._cursor > 0:
            self._cursor -= 1
            self._write(CURSOR_LEFT)

    def _on_right(self, _event: KeyEvent) -> None:
        if self._cursor < len(self._buffer):
            self._cursor += 1
            self._write(CURSOR_RIGHT)

    def _on_home(self, _event: KeyEvent) -> None:
        if self._cursor != 0:
            self._cursor = 0
            self._sync_line()

    def _on_end(self, _event: KeyEvent) -> None:
        if self._cursor != len(self._buffer):
            self._cursor = len(self._buffer)
            self._sync_line()

    def _on_history_up(self, _event: KeyEvent) -> None:
        history = self._shell.history
        if history.at_end:
            draft = self.buffer
        else:
            draft = self._draft
        entry = history.previous()
        if entry is None:
            return
        self._draft = draft
        self._load(entry)

    def _on_history_down(self, _event: KeyEvent) -> None:
        history = self._shell.history
        entry = history.next()
        if entry is None:
            return
        self._load(self._draft if history.at_end else entry)

    def _on_insert(self, event: KeyEvent) -> None:
        if not event.text:
            return
        self._insert(event.text)
        self._sync_line()

    def _insert(self, text: str) -> None:
        self._buffer[self._cursor : self._cursor] = list(text)
        self._cursor += len(text)

    def _load(self, text: str) -> None:
        self._buffer = list(text)
        self._cursor = len(self._buffer)
        self._sync_line()

    _HANDLERS: dict[Key, Callable[["LineEditor", KeyEvent], None]] = {
        Key.SUBMIT: _on_submit,
        Key.BACKSPACE: _on_backspace,
        Key.LEFT: _on_left,
        Key.RIGHT: _on_right,
        Key.HOME: _on_home,
        Key.END: _on_end,
        Key.HISTORY_UP: _on_history_up,
        Key.HISTORY_DOWN: _on_history_down,
        Key.INSERT: _on_insert,
    }
