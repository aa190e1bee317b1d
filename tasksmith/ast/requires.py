"""Variables a task requires before it can run."""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, scalar_text, string_list
from tasksmith.errors import TaskfileDecodeError


@dataclass
class VarWithValidation:
    """A required variable, optionally limited to a set of allowed values."""

    name: str = ""
    enum: list[str] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: yaml.Node) -> VarWithValidation:
        """Decode from a variable name or a name/enum mapping."""
        if isinstance(node, yaml.ScalarNode):
            return cls(name=scalar_text(node))
        if isinstance(node, yaml.MappingNode):
            return cls(
                name=scalar_text(mapping_get(node, "name")),
                enum=string_list(mapping_get(node, "enum")),
            )
        raise TaskfileDecodeError(None, node).with_type_message("requires")

    def deep_copy(self) -> VarWithValidation:
        """Return an independent copy."""
        return VarWithValidation(name=self.name, enum=list(self.enum))


@dataclass
class Requires:
    """The set of variables a task requires."""

    vars: list[VarWithValidation] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: yaml.Node) -> Requires:
        """Decode a mapping holding a ``vars`` list."""
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("requires")
        vars_node = mapping_get(node, "vars")
        if is_null(vars_node):
            return cls()
        if not isinstance(vars_node, yaml.SequenceNode):
            raise TaskfileDecodeError(None, vars_node).with_type_message("[]requires")
        return cls(vars=[VarWithValidation.from_node(item) for item in vars_node.value])

    def deep_copy(self) -> Requires:
        """Return an independent copy."""
        return Requires(vars=[var.deep_copy() for var in self.vars])