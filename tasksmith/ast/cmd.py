"""Commands run by a task."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import yaml

from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text, string_list
from tasksmith.ast.loop import For
from tasksmith.ast.platform import Platform
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError


def _optional_vars(node: yaml.Node | None) -> Vars | None:
    return None if is_null(node) else Vars.from_node(node)


def _optional_for(node: yaml.Node | None) -> For | None:
    return None if is_null(node) else For.from_node(node)


def _platforms(node: yaml.Node | None) -> list[Platform]:
    if is_null(node):
        return []
    if not isinstance(node, yaml.SequenceNode):
        raise TaskfileDecodeError(None, node).with_type_message("[]platform")
    return [Platform.from_node(item) for item in node.value]


def _try(builder: Callable[[], Cmd | None]) -> Cmd | None:
    try:
        return builder()
    except TaskfileDecodeError:
        return None


@dataclass
class Cmd:
    """A shell command, a task call, or a deferred one of either."""

    cmd: str = ""
    task: str = ""
    for_: For | None = None
    silent: bool = False
    set: list[str] = field(default_factory=list)
    shopt: list[str] = field(default_factory=list)
    vars: Vars | None = None
    ignore_error: bool = False
    defer: bool = False
    platforms: list[Platform] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: yaml.Node) -> Cmd:
        """Decode a command string or one of the command mappings."""
        if isinstance(node, yaml.ScalarNode):
            return cls(cmd=scalar_text(node))
        if isinstance(node, yaml.MappingNode):
            for builder in (
                lambda: cls._shell_command(node),
                lambda: cls._deferred_command(node),
                lambda: cls._deferred_call(node),
                lambda: cls._task_call(node),
            ):
                cmd = _try(builder)
                if cmd is not None:
                    return cmd
            raise TaskfileDecodeError(None, node).with_message("invalid keys in command")
        raise TaskfileDecodeError(None, node).with_type_message("command")

    @classmethod
    def _shell_command(cls, node: yaml.MappingNode) -> Cmd | None:
        command = scalar_text(mapping_get(node, "cmd"))
        loop = _optional_for(mapping_get(node, "for"))
        silent = scalar_bool(mapping_get(node, "silent"))
        set_options = string_list(mapping_get(node, "set"))
        shopt = string_list(mapping_get(node, "shopt"))
        ignore_error = scalar_bool(mapping_get(node, "ignore_error"))
        platforms = _platforms(mapping_get(node, "platforms"))
        if not command:
            return None
        return cls(
            cmd=command,
            for_=loop,
            silent=silent,
            set=set_options,
            shopt=shopt,
            ignore_error=ignore_error,
            platforms=platforms,
        )

    @classmethod
    def _deferred_command(cls, node: yaml.MappingNode) -> Cmd | None:
        command = scalar_text(mapping_get(node, "defer"))
        return cls(cmd=command, defer=True) if command else None

    @classmethod
    def _deferred_call(cls, node: yaml.MappingNode) -> Cmd | None:
        call = mapping_get(node, "defer")
        if is_null(call):
            return None
        if not isinstance(call, yaml.MappingNode):
            raise TaskfileDecodeError(None, call).with_type_message("call")
        task = scalar_text(mapping_get(call, "task"))
        call_vars = _optional_vars(mapping_get(call, "vars"))
        scalar_bool(mapping_get(call, "silent"))
        scalar_bool(mapping_get(call, "indirect"))
        return cls(task=task, vars=call_vars, defer=True) if task else None

    @classmethod
    def _task_call(cls, node: yaml.MappingNode) -> Cmd | None:
        task = scalar_text(mapping_get(node, "task"))
        call_vars = _optional_vars(mapping_get(node, "vars"))
        loop = _optional_for(mapping_get(node, "for"))
        silent = scalar_bool(mapping_get(node, "silent"))
        if not task:
            return None
        return cls(task=task, vars=call_vars, for_=loop, silent=silent)

    def deep_copy(self) -> Cmd:
        """Return an independent copy."""
        return Cmd(
            cmd=self.cmd,
            task=self.task,
            for_=self.for_.deep_copy() if self.for_ is not None else None,
            silent=self.silent,
            set=list(self.set),
            shopt=list(self.shopt),
            vars=self.vars.deep_copy() if self.vars is not None else None,
            ignore_error=self.ignore_error,
            defer=self.defer,
            platforms=[platform.deep_copy() for platform in self.platforms],
        )