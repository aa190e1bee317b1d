"""Tasks and their decoding from YAML."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

import yaml

from tasksmith.ast.call import Location
from tasksmith.ast.cmd import Cmd
from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text, string_list
from tasksmith.ast.dep import Dep
from tasksmith.ast.glob import Glob
from tasksmith.ast.platform import Platform
from tasksmith.ast.precondition import Precondition
from tasksmith.ast.requires import Requires
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError


def _sequence(node: yaml.Node | None, build: Callable[[yaml.Node], Any], type_name: str) -> list[Any]:
    if is_null(node):
        return []
    if not isinstance(node, yaml.SequenceNode):
        raise TaskfileDecodeError(None, node).with_type_message(type_name)
    return [None if is_null(item) else build(item) for item in node.value]


def _optional_vars(node: yaml.Node | None) -> Vars | None:
    return None if is_null(node) else Vars.from_node(node)


def _copy_or_none(value: Any) -> Any:
    return value.deep_copy() if value is not None else None


@dataclass
class Task:
    """A task of a Taskfile."""

    task: str = ""
    cmds: list[Cmd | None] = field(default_factory=list)
    deps: list[Dep | None] = field(default_factory=list)
    label: str = ""
    desc: str = ""
    prompt: str = ""
    summary: str = ""
    requires: Requires | None = None
    aliases: list[str] = field(default_factory=list)
    sources: list[Glob | None] = field(default_factory=list)
    generates: list[Glob | None] = field(default_factory=list)
    status: list[str] = field(default_factory=list)
    preconditions: list[Precondition | None] = field(default_factory=list)
    dir: str = ""
    set: list[str] = field(default_factory=list)
    shopt: list[str] = field(default_factory=list)
    vars: Vars | None = None
    env: Vars | None = None
    dotenv: list[str] = field(default_factory=list)
    silent: bool = False
    interactive: bool = False
    internal: bool = False
    method: str = ""
    prefix: str = ""
    ignore_error: bool = False
    run: str = ""
    platforms: list[Platform | None] = field(default_factory=list)
    watch: bool = False
    location: Location | None = None
    namespace: str = ""
    include_vars: Vars | None = None
    included_taskfile_vars: Vars | None = None

    @classmethod
    def from_node(cls, node: yaml.Node) -> Task:
        """Decode a single command, a list of commands or a full task mapping."""
        if isinstance(node, yaml.ScalarNode):
            return cls(cmds=[Cmd.from_node(node)])
        if isinstance(node, yaml.SequenceNode):
            return cls(cmds=_sequence(node, Cmd.from_node, "[]cmd"))
        if isinstance(node, yaml.MappingNode):
            return cls._from_mapping(node)
        raise TaskfileDecodeError(None, node).with_type_message("task")

    @classmethod
    def _from_mapping(cls, node: yaml.MappingNode) -> Task:
        def get(key: str) -> yaml.Node | None:
            return mapping_get(node, key)

        cmd_node = get("cmd")
        cmds_node = get("cmds")
        cmds = _sequence(cmds_node, Cmd.from_node, "[]cmd")
        single = None if is_null(cmd_node) else Cmd.from_node(cmd_node)
        requires_node = get("requires")
        task = cls(
            deps=_sequence(get("deps"), Dep.from_node, "[]dep"),
            label=scalar_text(get("label")),
            desc=scalar_text(get("desc")),
            prompt=scalar_text(get("prompt")),
            summary=scalar_text(get("summary")),
            aliases=string_list(get("aliases")),
            sources=_sequence(get("sources"), Glob.from_node, "[]glob"),
            generates=_sequence(get("generates"), Glob.from_node, "[]glob"),
            status=string_list(get("status")),
            preconditions=_sequence(get("preconditions"), Precondition.from_node, "[]precondition"),
            dir=scalar_text(get("dir")),
            set=string_list(get("set")),
            shopt=string_list(get("shopt")),
            vars=_optional_vars(get("vars")),
            env=_optional_vars(get("env")),
            dotenv=string_list(get("dotenv")),
            silent=scalar_bool(get("silent")),
            interactive=scalar_bool(get("interactive")),
            internal=scalar_bool(get("internal")),
            method=scalar_text(get("method")),
            prefix=scalar_text(get("prefix")),
            ignore_error=scalar_bool(get("ignore_error")),
            run=scalar_text(get("run")),
            platforms=_sequence(get("platforms"), Platform.from_node, "[]platform"),
            requires=None if is_null(requires_node) else Requires.from_node(requires_node),
            watch=scalar_bool(get("watch")),
        )
        if single is not None:
            if not is_null(cmds_node):
                raise TaskfileDecodeError(None, node).with_message("task cannot have both cmd and cmds")
            task.cmds = [single]
        else:
            task.cmds = cmds
        return task

    def name(self) -> str:
        """The label if one is set, otherwise the task name."""
        return self.label or self.task

    def local_name(self) -> str:
        """The task name without its namespace."""
        return self.task.removeprefix(self.namespace).removeprefix(":")

    def wildcard_match(self, name: str) -> tuple[bool, list[str]]:
        """Match ``name`` against this task's name, where ``*`` is a wildcard.

        Returns whether it matched and the values captured by the wildcards.
        """
        match = re.fullmatch(self.task.replace("*", "(.*)"), name)
        if match is None:
            return False, []
        wildcards = [group if group is not None else "" for group in match.groups()]
        if len(wildcards) != self.task.count("*"):
            return False, wildcards
        return True, wildcards

    def deep_copy(self) -> Task:
        """Return an independent copy; the watch flag is not carried over."""
        return Task(
            task=self.task,
            cmds=[_copy_or_none(cmd) for cmd in self.cmds],
            deps=[_copy_or_none(dep) for dep in self.deps],
            label=self.label,
            desc=self.desc,
            prompt=self.prompt,
            summary=self.summary,
            aliases=list(self.aliases),
            sources=[replace(glob) if glob is not None else None for glob in self.sources],
            generates=[replace(glob) if glob is not None else None for glob in self.generates],
            status=list(self.status),
            preconditions=[_copy_or_none(item) for item in self.preconditions],
            dir=self.dir,
            set=list(self.set),
            shopt=list(self.shopt),
            vars=_copy_or_none(self.vars),
            env=_copy_or_none(self.env),
            dotenv=list(self.dotenv),
            silent=self.silent,
            interactive=self.interactive,
            internal=self.internal,
            method=self.method,
            prefix=self.prefix,
            ignore_error=self.ignore_error,
            run=self.run,
            include_vars=_copy_or_none(self.include_vars),
            included_taskfile_vars=_copy_or_none(self.included_taskfile_vars),
            platforms=[_copy_or_none(platform) for platform in self.platforms],
            location=_copy_or_none(self.location),
            requires=_copy_or_none(self.requires),
            namespace=self.namespace,
        )