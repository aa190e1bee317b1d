"""The directed acyclic graph of a Taskfile and the Taskfiles it includes."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

from tasksmith.ast.include import Include
from tasksmith.ast.task import Task
from tasksmith.ast.taskfile import Taskfile
from tasksmith.errors import TaskfileCycleError, TaskfileError


@dataclass
class TaskfileVertex:
    """A Taskfile in the graph, identified by its URI."""

    uri: str
    taskfile: Taskfile | None = None


class TaskfileGraph:
    """Taskfiles as vertices, with edges from including to included Taskfiles."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.vertices: dict[str, TaskfileVertex] = {}
        self.edges: dict[tuple[str, str], list[Include]] = {}

    def add_vertex(self, vertex: TaskfileVertex) -> bool:
        """Add a vertex; return False if one with the same URI already exists."""
        with self.lock:
            if vertex.uri in self.vertices:
                return False
            self.vertices[vertex.uri] = vertex
            return True

    def _reaches(self, start: str, target: str) -> bool:
        seen = set()
        pending = [start]
        while pending:
            current = pending.pop()
            if current == target:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(dest for (src, dest) in self.edges if src == current)
        return False

    def add_edge(self, source: str, destination: str, include: Include) -> None:
        """Record that ``source`` includes ``destination`` with ``include``."""
        with self.lock:
            for uri in (source, destination):
                if uri not in self.vertices:
                    raise KeyError(uri)
            existing = self.edges.get((source, destination))
            if existing is not None:
                existing.append(include)
                return
            if self._reaches(destination, source):
                raise TaskfileCycleError(source, destination)
            self.edges[(source, destination)] = [include]

    def _topological_order(self) -> list[str]:
        in_degree = {uri: 0 for uri in self.vertices}
        for _, dest in self.edges:
            in_degree[dest] += 1
        queue = deque(uri for uri, degree in in_degree.items() if degree == 0)
        order = []
        while queue:
            uri = queue.popleft()
            order.append(uri)
            for src, dest in self.edges:
                if src == uri:
                    in_degree[dest] -= 1
                    if in_degree[dest] == 0:
                        queue.append(dest)
        if len(order) != len(self.vertices):
            raise TaskfileError("task: Taskfile graph contains a cycle")
        return order

    def merge(self) -> Taskfile:
        """Merge every included Taskfile into its includers and return the root."""
        with self.lock:
            order = self._topological_order()
            if not order:
                raise TaskfileError("task: Taskfile graph is empty")
            for uri in reversed(order[1:]):
                included = self.vertices[uri]
                for (src, dest), includes in self.edges.items():
                    if dest != uri:
                        continue
                    parent = self.vertices[src]
                    for include in includes:
                        parent.taskfile.merge(included.taskfile, include)
            root = self.vertices[order[0]].taskfile
            for name, task in list(root.tasks.items()):
                if task is None:
                    task = Task()
                    root.tasks[name] = task
                task.task = name
            return root

    def visualize(self, filename: str) -> None:
        """Write the graph to ``filename`` in DOT format."""
        with self.lock:
            lines = ["strict digraph {"]
            lines.extend(f'\t"{uri}" [ weight=0 ];' for uri in self.vertices)
            lines.extend(
                f'\t"{src}" -> "{dest}" [ weight={len(includes)} ];'
                for (src, dest), includes in self.edges.items()
            )
            lines.append("}")
        with open(filename, "w", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")