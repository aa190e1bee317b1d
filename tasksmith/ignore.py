"""Paths the file watcher never tracks."""

from __future__ import annotations

_IGNORE_PATHS = ("/.task", "/.git", "/.hg", "/node_modules")


def should_ignore_file(path: str) -> bool:
    """Whether ``path`` lies inside, or is, a directory the watcher skips."""
    return any(f"{ignored}/" in path or path.endswith(ignored) for ignored in _IGNORE_PATHS)