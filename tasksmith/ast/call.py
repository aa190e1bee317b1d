"""Task calls and source locations."""

from __future__ import annotations

from dataclasses import dataclass, replace

from tasksmith.ast.vars import Vars


@dataclass
class Call:
    """The parameters of a task call."""

    task: str
    vars: Vars | None = None
    silent: bool = False
    indirect: bool = False


@dataclass
class Location:
    """Where a task is defined."""

    line: int = 0
    column: int = 0
    taskfile: str = ""

    def deep_copy(self) -> Location:
        """Return an independent copy."""
        return replace(self)