"""Command history with a navigation cursor.

Submitted lines are appended and never edited in place.  A separate
cursor tracks up/down navigation: ``cursor == len(entries)`` means the
user is on a fresh, not-yet-submitted line.  Navigating only moves the
cursor; the stored entries change only by appending a new submission.
"""


class HistoryBuffer:
    """Append-only list of submitted lines plus a navigation cursor."""

    def __init__(self) -> None:
        """Create an empty history positioned on a fresh line."""
        self._entries: list[str] = []
        self._cursor = 0

    @property
    def entries(self) -> list[str]:
        """Return a copy of the stored lines, oldest first."""
        return list(self._entries)

    @property
    def cursor(self) -> int:
        """Return the navigation cursor."""
        return self._cursor

    @property
    def at_end(self) -> bool:
        """Return True when the cursor is past the last entry."""
        return self._cursor == len(self._entries)

    def append(self, line: str) -> None:
        """Store a submitted line and move the cursor past the end."""
        self._entries.append(line)
        self._cursor = len(self._entries)

    def previous(self) -> str | None:
        """Step back one entry and return it, or None at the oldest entry."""
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step forward one entry and return it.

        Returns ``""`` when stepping onto the fresh line past the end,
        and None when already there.
        """
        if self.at_end:
            return None
        self._cursor += 1
        if self.at_end:
            return ""
        return self._entries[self._cursor]

    def __len__(self) -> int:
        return len(self._entries)
