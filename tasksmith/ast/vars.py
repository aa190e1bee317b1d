"""Static and dynamic Taskfile variables."""

from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from typing import Any

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, node_to_python, scalar_text
from tasksmith.errors import TaskfileDecodeError


@dataclass(frozen=True)
class Var:
    """A variable: a static value, a live value, a shell command or a reference."""

    value: Any = None
    live: Any = None
    sh: str = ""
    ref: str = ""
    dir: str = ""

    @classmethod
    def from_node(cls, node: yaml.Node) -> Var:
        """Decode a variable from its YAML node."""
        if isinstance(node, yaml.MappingNode):
            first_key = scalar_text(node.value[0][0]) if node.value else ""
            if first_key in ("sh", "ref"):
                return cls(
                    sh=scalar_text(mapping_get(node, "sh")),
                    ref=scalar_text(mapping_get(node, "ref")),
                )
            raise TaskfileDecodeError(None, node).with_message("maps cannot be assigned to variables")
        return cls(value=node_to_python(node))


class Vars(dict[str, Var]):
    """An insertion-ordered mapping of variable names to variables."""

    @classmethod
    def from_node(cls, node: yaml.Node | None) -> Vars:
        """Decode a mapping node of variables, keeping their order."""
        if is_null(node):
            return cls()
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("vars")
        return cls((scalar_text(key), Var.from_node(value)) for key, value in node.value)

    def merge(self, other: Vars | None, include: Any = None) -> None:
        """Copy every variable of ``other`` into this mapping.

        When the include is an advanced import, the variables take its directory.
        """
        if not other:
            return
        advanced = include is not None and include.advanced_import
        for key, value in other.items():
            self[key] = replace(value, dir=include.dir) if advanced else value

    def deep_copy(self) -> Vars:
        """Return an independent copy of the variables."""
        return type(self)((key, copy.deepcopy(value)) for key, value in self.items())

    def to_cache_map(self) -> dict[str, Any]:
        """Return the resolved values, leaving out unresolved shell variables."""
        return {
            key: var.live if var.live is not None else var.value
            for key, var in self.items()
            if not var.sh
        }