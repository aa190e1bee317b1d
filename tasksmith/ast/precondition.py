"""Preconditions that must hold for a task to run."""

from __future__ import annotations

from dataclasses import dataclass, replace

import yaml

from tasksmith.ast.decoding import mapping_get, scalar_text
from tasksmith.errors import TaskfileDecodeError


@dataclass
class Precondition:
    """A shell check and the message shown when it fails."""

    sh: str = ""
    msg: str = ""

    @classmethod
    def from_node(cls, node: yaml.Node) -> Precondition:
        """Decode a precondition from a command string or an sh/msg mapping."""
        if isinstance(node, yaml.ScalarNode):
            command = scalar_text(node)
            return cls(sh=command, msg=f"`{command}` failed")
        if isinstance(node, yaml.MappingNode):
            command = scalar_text(mapping_get(node, "sh"))
            message = scalar_text(mapping_get(node, "msg")) or f"{command} failed"
            return cls(sh=command, msg=message)
        raise TaskfileDecodeError(None, node).with_type_message("precondition")

    def deep_copy(self) -> Precondition:
        """Return an independent copy."""
        return replace(self)