"""Environment variables — session configuration via key-value pairs.

A Unix shell keeps an environment: a set of ``KEY=VALUE`` string pairs.
Common examples are ``HOME`` (used for ``~`` expansion and a bare
``cd``), ``PWD`` (the working directory) and ``?`` (the status of the
last command).

Key design properties:
    - **Strings only** — both keys and values are strings.
    - **Missing means empty** — ``$UNSET`` expands to ``""``, never an
      error, so ``lookup`` is the expansion-friendly accessor.
    - **Convention over enforcement** — any non-empty key is accepted,
      including punctuation such as ``?``.
"""

from collections.abc import Iterator


class Environment:
    """A key-value store for environment variables."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def lookup(self, key: str) -> str:
        """Return the value for *key*, or an empty string if not set."""
        return self._vars.get(key, "")

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def delete(self, key: str) -> None:
        """Remove *key* from the environment.

        Raises:
            KeyError: If *key* does not exist.

        """
        del self._vars[key]

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs."""
        return list(self._vars.items())

    def __getitem__(self, key: str) -> str:
        return self._vars[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._vars[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._vars)
