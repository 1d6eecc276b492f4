"""Session configuration.

One ``ShellConfig`` describes how a session starts: the prompt label,
the home directory, the seeded pseudo-filesystem, and the paste guard
interval used by the line editor.  Everything has a sensible default so
``ShellConfig()`` is a working setup.
"""

from dataclasses import dataclass, field

# Bulk-pasted data arriving this soon after a key event is the echo of
# that same key and must not be processed twice.
DEFAULT_GUARD_INTERVAL = 0.015


@dataclass(frozen=True)
class ShellConfig:
    """Startup settings for a shell session."""

    prompt: str = "WebShell"
    home: str = "/"
    initial_directory: str = "/"
    directories: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    guard_interval: float = DEFAULT_GUARD_INTERVAL
    env: dict[str, str] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def styled_prompt(self) -> str:
        """Return the prompt with the label in bold yellow."""
        return f"\x1b[1;33m{self.prompt}\x1b[0m $ "

    def plain_prompt(self) -> str:
        """Return the prompt without terminal escapes."""
        return f"{self.prompt} $ "
