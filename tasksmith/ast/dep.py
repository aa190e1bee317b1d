"""Task dependencies."""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text
from tasksmith.ast.loop import For
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError


@dataclass
class Dep:
    """A task that must run before another."""

    task: str = ""
    for_: For | None = None
    vars: Vars | None = None
    silent: bool = False

    @classmethod
    def from_node(cls, node: yaml.Node) -> Dep:
        """Decode a task name or a task call mapping."""
        if isinstance(node, yaml.ScalarNode):
            return cls(task=scalar_text(node))
        if isinstance(node, yaml.MappingNode):
            for_node = mapping_get(node, "for")
            vars_node = mapping_get(node, "vars")
            return cls(
                task=scalar_text(mapping_get(node, "task")),
                for_=None if is_null(for_node) else For.from_node(for_node),
                vars=None if is_null(vars_node) else Vars.from_node(vars_node),
                silent=scalar_bool(mapping_get(node, "silent")),
            )
        raise TaskfileDecodeError(None, node).with_type_message("dependency")

    def deep_copy(self) -> Dep:
        """Return an independent copy."""
        return Dep(
            task=self.task,
            for_=self.for_.deep_copy() if self.for_ is not None else None,
            vars=self.vars.deep_copy() if self.vars is not None else None,
            silent=self.silent,
        )