"""Output styles for task commands."""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text
from tasksmith.errors import TaskfileDecodeError


@dataclass
class OutputGroup:
    """Options of the ``group`` output style."""

    begin: str = ""
    end: str = ""
    error_only: bool = False

    @classmethod
    def _from_node(cls, node: yaml.Node) -> OutputGroup:
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("output group")
        return cls(
            begin=scalar_text(mapping_get(node, "begin")),
            end=scalar_text(mapping_get(node, "end")),
            error_only=scalar_bool(mapping_get(node, "error_only")),
        )

    def is_set(self) -> bool:
        """Whether a begin or end template is set."""
        return bool(self.begin or self.end)


@dataclass
class Output:
    """The output style of a Taskfile."""

    name: str = ""
    group: OutputGroup = field(default_factory=OutputGroup)

    @classmethod
    def from_node(cls, node: yaml.Node) -> Output:
        """Decode a style name or a mapping with a ``group`` key."""
        if isinstance(node, yaml.ScalarNode):
            return cls(name=scalar_text(node))
        if isinstance(node, yaml.MappingNode):
            group_node = mapping_get(node, "group")
            if is_null(group_node):
                raise TaskfileDecodeError(None, node).with_message(
                    'output style must have the "group" key when in mapping form'
                )
            return cls(name="group", group=OutputGroup._from_node(group_node))
        raise TaskfileDecodeError(None, node).with_type_message("output")

    def is_set(self) -> bool:
        """Whether a custom output style is set."""
        return self.name != ""