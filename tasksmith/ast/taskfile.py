"""The Taskfile document and merging included Taskfiles into it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from fractions import Fraction

import yaml
from packaging.version import InvalidVersion, Version

from tasksmith.ast.decoding import is_null, mapping_get, scalar_bool, scalar_text, string_list
from tasksmith.ast.include import Include, Includes
from tasksmith.ast.output import Output
from tasksmith.ast.tasks import Tasks
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError, TaskfileError

V3 = Version("3")

_DOTENV_MESSAGE = (
    "task: Included Taskfiles can't have dotenv declarations. "
    "Please, move the dotenv declaration to the main Taskfile"
)

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_COMPONENT = r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION = re.compile(rf"(?:{_COMPONENT})+")


def parse_duration(text: str) -> float:
    """Parse a duration such as ``300ms`` or ``1h2m3s`` into seconds."""
    sign = -1 if text.startswith("-") else 1
    body = text[1:] if text[:1] in "+-" and text else text
    if body == "0":
        return 0.0
    if not body or not _DURATION.fullmatch(body):
        raise ValueError(f'time: invalid duration "{text}"')
    nanoseconds = sum(
        Fraction(number) * _UNIT_NANOSECONDS[unit] for number, unit in re.findall(_COMPONENT, body)
    )
    return sign * int(nanoseconds) / 1e9


def _format_version(version: Version | None) -> str:
    if version is None:
        return ""
    text = f"{version.major}.{version.minor}.{version.micro}"
    if version.pre:
        text += "-" + "".join(str(part) for part in version.pre)
    return text


@dataclass
class Taskfile:
    """A parsed Taskfile."""

    location: str = ""
    version: Version | None = None
    output: Output = field(default_factory=Output)
    method: str = ""
    includes: Includes = field(default_factory=Includes)
    set: list[str] = field(default_factory=list)
    shopt: list[str] = field(default_factory=list)
    vars: Vars = field(default_factory=Vars)
    env: Vars = field(default_factory=Vars)
    tasks: Tasks = field(default_factory=Tasks)
    silent: bool = False
    dotenv: list[str] = field(default_factory=list)
    run: str = ""
    interval: float = 0.0

    @classmethod
    def from_node(cls, node: yaml.Node) -> Taskfile:
        """Decode a Taskfile from its root mapping."""
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("taskfile")

        def get(key: str) -> yaml.Node | None:
            return mapping_get(node, key)

        version_node = get("version")
        version = None
        if not is_null(version_node):
            try:
                version = Version(scalar_text(version_node))
            except InvalidVersion as err:
                raise TaskfileDecodeError(err, version_node) from err

        interval_node = get("interval")
        interval = 0.0
        if not is_null(interval_node):
            try:
                interval = parse_duration(scalar_text(interval_node))
            except ValueError as err:
                raise TaskfileDecodeError(err, interval_node) from err

        output_node = get("output")
        return cls(
            version=version,
            output=Output() if is_null(output_node) else Output.from_node(output_node),
            method=scalar_text(get("method")),
            includes=Includes.from_node(get("includes")),
            set=string_list(get("set")),
            shopt=string_list(get("shopt")),
            vars=Vars.from_node(get("vars")),
            env=Vars.from_node(get("env")),
            tasks=Tasks.from_node(get("tasks")),
            silent=scalar_bool(get("silent")),
            dotenv=string_list(get("dotenv")),
            run=scalar_text(get("run")),
            interval=interval,
        )

    def merge(self, other: Taskfile, include: Include) -> None:
        """Merge an included Taskfile into this one."""
        if self.version != other.version:
            raise TaskfileError(
                "task: Taskfiles versions should match. "
                f'First is "{_format_version(self.version)}" but second is "{_format_version(other.version)}"'
            )
        if other.dotenv:
            raise TaskfileError(_DOTENV_MESSAGE)
        if other.output.is_set():
            self.output = other.output
        if self.vars is None:
            self.vars = Vars()
        if self.env is None:
            self.env = Vars()
        self.vars.merge(other.vars, include)
        self.env.merge(other.env, include)
        self.tasks.merge(other.tasks, include, self.vars)