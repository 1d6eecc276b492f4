"""Virtual path resolution for the in-memory pseudo-filesystem.

Paths are plain slash-separated strings.  There is no inode tree: the
shell state keeps two flat sets, one of file paths and one of directory
paths, and a path "exists" when it is an exact member of one of them.

Resolution is purely lexical:

    - ``.`` segments are dropped, ``..`` pops the previous segment
      (``..`` at the root stays at the root).
    - Empty segments (``//``) collapse.
    - The result is always absolute with no trailing slash, except
      the root itself.

A path only counts as *absolute* when it is already normalized: it
starts with ``/`` and has no ``.`` or ``..`` segment.  Anything else,
including ``/a/../b``, is joined onto the current directory first.

Ancestor consistency is not checked here.  Nothing stops the directory
set from holding ``/a/b`` without ``/a``; the commands that add paths
keep the parent chain registered.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from webshell.state import ShellState

ROOT = "/"


class PathKind(Enum):
    """What a virtual path refers to."""

    FILE = "file"
    DIRECTORY = "directory"
    NOT_FOUND = "not-found"


def is_absolute(path: str) -> bool:
    """Return True if *path* is an already-normalized absolute path.

    Examples::

        "/a/b"     → True
        "/"        → True
        "/a/../b"  → False  (has a ``..`` segment)
        "/a/."     → False  (ends with ``.``)
        "a/b"      → False

    """
    if not path.startswith(ROOT):
        return False
    if "/./" in path or "/../" in path:
        return False
    last = path.rsplit("/", 1)[-1]
    return last not in (".", "..")


def normalize(path: str) -> str:
    """Collapse ``.``, ``..`` and empty segments of an absolute path."""
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return ROOT + "/".join(parts)


def resolve(current_dir: str, target: str) -> str:
    """Resolve *target* against *current_dir* into a clean absolute path.

    Args:
        current_dir: The directory relative paths start from.
        target: The path as typed by the user.

    Returns:
        The normalized absolute path.

    """
    if is_absolute(target):
        return normalize(target)
    return normalize(f"{current_dir}/{target}")


def parent(path: str) -> str:
    """Return the parent directory of *path* (the root is its own parent)."""
    return resolve(path, "..")


def ancestors(path: str) -> list[str]:
    """Return every ancestor of a normalized path, root first.

    Examples::

        "/a/b/c" → ["/", "/a", "/a/b"]
        "/"      → []

    """
    chain: list[str] = []
    current = path
    while current != ROOT:
        current = parent(current)
        chain.append(current)
    chain.reverse()
    return chain


def classify(path: str, state: ShellState) -> PathKind:
    """Classify *path* by exact membership in the state's path sets.

    Files are checked before directories; the first match wins.
    """
    if path in state.files:
        return PathKind.FILE
    if path in state.directories:
        return PathKind.DIRECTORY
    return PathKind.NOT_FOUND


def children(directory: str, paths: Iterable[str]) -> list[str]:
    """Return the names of the direct children of *directory* in *paths*."""
    prefix = directory if directory == ROOT else directory + "/"
    names = {
        p[len(prefix) :]
        for p in paths
        if p != directory and p.startswith(prefix) and "/" not in p[len(prefix) :]
    }
    return sorted(names)


def looks_like_path(word: str) -> bool:
    """Return True if a command word should be treated as a path."""
    return "/" in word or word in (".", "..")
