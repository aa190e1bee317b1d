"""Included Taskfiles."""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text, string_list
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError


@dataclass
class Include:
    """An included Taskfile and the options it is included with."""

    namespace: str = ""
    taskfile: str = ""
    dir: str = ""
    optional: bool = False
    internal: bool = False
    aliases: list[str] = field(default_factory=list)
    advanced_import: bool = False
    vars: Vars | None = None
    flatten: bool = False

    @classmethod
    def from_node(cls, node: yaml.Node) -> Include:
        """Decode a Taskfile path or a mapping of include options."""
        if isinstance(node, yaml.ScalarNode):
            return cls(taskfile=scalar_text(node))
        if isinstance(node, yaml.MappingNode):
            vars_node = mapping_get(node, "vars")
            return cls(
                taskfile=scalar_text(mapping_get(node, "taskfile")),
                dir=scalar_text(mapping_get(node, "dir")),
                optional=scalar_bool(mapping_get(node, "optional")),
                internal=scalar_bool(mapping_get(node, "internal")),
                flatten=scalar_bool(mapping_get(node, "flatten")),
                aliases=string_list(mapping_get(node, "aliases")),
                vars=None if is_null(vars_node) else Vars.from_node(vars_node),
                advanced_import=True,
            )
        raise TaskfileDecodeError(None, node).with_type_message("include")

    def deep_copy(self) -> Include:
        """Return a copy with its own variables; aliases are not carried over."""
        return Include(
            namespace=self.namespace,
            taskfile=self.taskfile,
            dir=self.dir,
            optional=self.optional,
            internal=self.internal,
            advanced_import=self.advanced_import,
            vars=self.vars.deep_copy() if self.vars is not None else None,
            flatten=self.flatten,
        )


class Includes(dict[str, Include]):
    """An insertion-ordered mapping of namespaces to includes."""

    @classmethod
    def from_node(cls, node: yaml.Node | None) -> Includes:
        """Decode a mapping of namespaces to includes."""
        if is_null(node):
            return cls()
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("includes")
        includes = cls()
        for key_node, value_node in node.value:
            namespace = scalar_text(key_node)
            include = Include.from_node(value_node)
            include.namespace = namespace
            includes[namespace] = include
        return includes