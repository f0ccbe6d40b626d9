# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class Task:
    """A pipeline task as declared in the manifest."""
    name: str
    task_ref_name: str = ""
    run_after: tuple[str, ...] = ()


@dataclass
class TaskNode:
    """
    A task inside a TaskGraph.

    `dependencies` holds the names of the nodes that run AFTER this one
    (downstream successors). Names are handles into the owning graph.
    """
    name: str
    task_ref_name: str = ""
    dependencies: list[str] = field(default_factory=list)
    is_root: bool = True

    @property
    def is_leaf(self) -> bool:
        return not self.dependencies

    def label(self, with_task_ref: bool = False, sep: str = " ") -> str:
        """Visible label: bare name, or name and taskRef joined by `sep`."""
        if with_task_ref and self.task_ref_name:
            return f"{self.name}{sep}({self.task_ref_name})"
        return self.name


@dataclass
class TaskGraph:
    """All nodes of one pipeline (or pipeline run), keyed by task name."""
    pipeline_name: str = ""
    nodes: Dict[str, TaskNode] = field(default_factory=dict)

    def dependencies_of(self, name: str) -> List[TaskNode]:
        return [self.nodes[dep] for dep in self.nodes[name].dependencies]

    def edges(self) -> List[tuple[str, str]]:
        """(predecessor, successor) pairs in node order."""
        return [(node.name, dep) for node in self.nodes.values() for dep in node.dependencies]
