"""The collection of tasks of a Taskfile and merging included tasks."""

from __future__ import annotations

import os
from dataclasses import dataclass

import yaml

from tasksmith.ast.call import Call, Location
from tasksmith.ast.decoding import is_null, scalar_text
from tasksmith.ast.include import Include
from tasksmith.ast.task import Task
from tasksmith.ast.vars import Vars
from tasksmith.errors import TaskfileDecodeError, TaskNameFlattenConflictError

NAMESPACE_SEPARATOR = ":"


def task_name_with_namespace(task_name: str, namespace: str) -> str:
    """Prefix a task name with a namespace, unless it starts with the separator."""
    if task_name.startswith(NAMESPACE_SEPARATOR):
        return task_name.removeprefix(NAMESPACE_SEPARATOR)
    return f"{namespace}{NAMESPACE_SEPARATOR}{task_name}"


def _smart_join(base: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    joined = os.path.join(base, path) if base else path
    return os.path.normpath(joined) if joined else ""


@dataclass
class MatchingTask:
    """A task that matched a call, with any wildcard values."""

    task: Task
    wildcards: list[str] | None = None


class Tasks(dict[str, Task]):
    """An insertion-ordered mapping of task names to tasks."""

    @classmethod
    def from_node(cls, node: yaml.Node | None) -> Tasks:
        """Decode a mapping of tasks, naming them and recording their locations."""
        if is_null(node):
            return cls()
        if not isinstance(node, yaml.MappingNode):
            raise TaskfileDecodeError(None, node).with_type_message("tasks")
        tasks = cls()
        for key_node, value_node in node.value:
            name = scalar_text(key_node)
            task = Task() if is_null(value_node) else Task.from_node(value_node)
            task.task = name
            tasks[name] = task
        for name, task in tasks.items():
            for content in (item for pair in node.value for item in pair):
                if isinstance(content, yaml.ScalarNode) and content.value == name:
                    task.location = Location(
                        line=content.start_mark.line + 1,
                        column=content.start_mark.column + 1,
                    )
        return tasks

    def find_matching_tasks(self, call: Call | None) -> list[MatchingTask]:
        """Return the task named by the call, or every task whose wildcards match it."""
        if call is None:
            return []
        direct = self.get(call.task)
        if direct is not None:
            return [MatchingTask(task=direct)]
        matches = []
        for task in self.values():
            if task is None:
                continue
            matched, wildcards = task.wildcard_match(call.task)
            if matched:
                matches.append(MatchingTask(task=task, wildcards=wildcards))
        return matches

    def merge(self, other: Tasks, include: Include, included_taskfile_vars: Vars | None) -> None:
        """Add the tasks of an included Taskfile under the include's namespace."""
        for name, original in other.items():
            if original is None:
                original = Task(task=name)
            task = original.deep_copy()
            task.internal = task.internal or include.internal
            task_name = name
            if not include.flatten:
                for dep in task.deps:
                    if dep is not None and dep.task:
                        dep.task = task_name_with_namespace(dep.task, include.namespace)
                for cmd in task.cmds:
                    if cmd is not None and cmd.task:
                        cmd.task = task_name_with_namespace(cmd.task, include.namespace)
                task.aliases = [task_name_with_namespace(alias, include.namespace) for alias in task.aliases]
                for namespace_alias in include.aliases:
                    task.aliases.append(task_name_with_namespace(task.task, namespace_alias))
                    task.aliases.extend(
                        task_name_with_namespace(alias, namespace_alias) for alias in original.aliases
                    )
                task_name = task_name_with_namespace(name, include.namespace)
                task.namespace = include.namespace
                task.task = task_name

            if include.advanced_import:
                task.dir = _smart_join(include.dir, task.dir)
                if task.include_vars is None:
                    task.include_vars = Vars()
                task.include_vars.merge(include.vars, None)
                task.included_taskfile_vars = (
                    included_taskfile_vars.deep_copy() if included_taskfile_vars is not None else None
                )

            if self.get(task_name) is not None:
                raise TaskNameFlattenConflictError(task_name, include.namespace)
            self[task_name] = task

        if other.get("default") is not None and self.get(include.namespace) is None and not include.flatten:
            default_task = self[f"{include.namespace}{NAMESPACE_SEPARATOR}default"]
            default_task.aliases.append(include.namespace)
            default_task.aliases.extend(include.aliases)