"""The ``for`` clause of commands and dependencies."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, node_to_python, scalar_text
from tasksmith.errors import TaskfileDecodeError


def _decode_matrix(node: yaml.Node | None) -> dict[str, list[Any]]:
    if is_null(node):
        return {}
    if not isinstance(node, yaml.MappingNode):
        raise TaskfileDecodeError(None, node).with_type_message("matrix")
    matrix: dict[str, list[Any]] = {}
    for key_node, value_node in node.value:
        if is_null(value_node):
            matrix[scalar_text(key_node)] = []
        elif isinstance(value_node, yaml.SequenceNode):
            matrix[scalar_text(key_node)] = node_to_python(value_node)
        else:
            raise TaskfileDecodeError(None, value_node).with_type_message("[]any")
    return matrix


@dataclass
class For:
    """What a command or dependency loops over."""

    from_: str = ""
    items: list[Any] = field(default_factory=list)
    matrix: dict[str, list[Any]] = field(default_factory=dict)
    var: str = ""
    split: str = ""
    as_: str = ""

    @classmethod
    def from_node(cls, node: yaml.Node) -> For:
        """Decode a loop from a source name, an explicit list or a var/matrix mapping."""
        if isinstance(node, yaml.ScalarNode):
            return cls(from_=scalar_text(node))
        if isinstance(node, yaml.SequenceNode):
            return cls(items=node_to_python(node))
        if isinstance(node, yaml.MappingNode):
            matrix = _decode_matrix(mapping_get(node, "matrix"))
            var = scalar_text(mapping_get(node, "var"))
            if not var and not matrix:
                raise TaskfileDecodeError(None, node).with_message("invalid keys in for")
            if var and matrix:
                raise TaskfileDecodeError(None, node).with_message("cannot use both var and matrix in for")
            return cls(
                matrix=matrix,
                var=var,
                split=scalar_text(mapping_get(node, "split")),
                as_=scalar_text(mapping_get(node, "as")),
            )
        raise TaskfileDecodeError(None, node).with_type_message("for")

    def deep_copy(self) -> For:
        """Return an independent copy."""
        return copy.deepcopy(self)