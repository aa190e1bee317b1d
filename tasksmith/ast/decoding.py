"""YAML composition and the small decoding helpers shared by the AST types."""

from __future__ import annotations

import re
from typing import Any

import yaml

from tasksmith.errors import TaskfileDecodeError

_NULL_TAG = "tag:yaml.org,2002:null"
_BOOL_TAG = "tag:yaml.org,2002:bool"
_TRUE_WORDS = {"y", "Y", "yes", "Yes", "YES", "on", "On", "ON"}
_FALSE_WORDS = {"n", "N", "no", "No", "NO", "off", "Off", "OFF"}


class _Loader(yaml.SafeLoader):
    """A safe loader that only treats true/false as booleans and keeps timestamps as text."""


_Loader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_Loader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
_Loader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)


def compose(text: str | bytes) -> yaml.Node | None:
    """Compose a YAML document into a node tree; None for an empty document.

    Syntax errors propagate as ``yaml.YAMLError``.
    """
    return yaml.compose(text, Loader=_Loader)


def node_to_python(node: yaml.Node) -> Any:
    """Build plain Python values (dicts, lists, scalars) from a node."""
    loader = _Loader("")
    try:
        return loader.construct_document(node)
    finally:
        loader.dispose()


def mapping_get(node: yaml.Node | None, key: str) -> yaml.Node | None:
    """Return the value node stored under ``key`` in a mapping node, if any."""
    if not isinstance(node, yaml.MappingNode):
        return None
    return next(
        (
            value
            for key_node, value in node.value
            if isinstance(key_node, yaml.ScalarNode) and key_node.value == key
        ),
        None,
    )


def decode(kind: Any, text: str | bytes) -> Any:
    """Parse ``text`` and build ``kind`` from its root node."""
    node = compose(text)
    if node is None:
        return kind()
    return kind.from_node(node)


def is_null(node: yaml.Node | None) -> bool:
    """Whether the node is absent or an explicit YAML null."""
    return node is None or (isinstance(node, yaml.ScalarNode) and node.tag == _NULL_TAG)


def scalar_text(node: yaml.Node | None) -> str:
    """Decode a scalar node as a string; null gives the empty string."""
    if is_null(node):
        return ""
    if not isinstance(node, yaml.ScalarNode):
        raise TaskfileDecodeError(None, node).with_type_message("string")
    return node.value


def scalar_bool(node: yaml.Node | None) -> bool:
    """Decode a scalar node as a boolean, accepting the YAML 1.1 words too."""
    if is_null(node):
        return False
    if isinstance(node, yaml.ScalarNode):
        if node.tag == _BOOL_TAG:
            return node.value.lower() == "true"
        if node.value in _TRUE_WORDS:
            return True
        if node.value in _FALSE_WORDS:
            return False
    raise TaskfileDecodeError(None, node).with_type_message("bool")


def string_list(node: yaml.Node | None) -> list[str]:
    """Decode a sequence of scalars as a list of strings; null gives an empty list."""
    if is_null(node):
        return []
    if not isinstance(node, yaml.SequenceNode):
        raise TaskfileDecodeError(None, node).with_type_message("[]string")
    return [scalar_text(item) for item in node.value]