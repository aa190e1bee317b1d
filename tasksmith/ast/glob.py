"""Source and generate globs."""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from tasksmith.ast.decoding import mapping_get, scalar_text
from tasksmith.errors import TaskfileDecodeError


@dataclass
class Glob:
    """A glob pattern, optionally negated with the ``exclude`` form."""

    glob: str = ""
    negate: bool = False

    @classmethod
    def from_node(cls, node: yaml.Node) -> Glob:
        """Decode a glob from a scalar or an ``exclude`` mapping."""
        if isinstance(node, yaml.ScalarNode):
            return cls(glob=node.value)
        if isinstance(node, yaml.MappingNode):
            return cls(glob=scalar_text(mapping_get(node, "exclude")), negate=True)
        raise TaskfileDecodeError(None, node).with_type_message("glob")