# formats/dot.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..model import TaskGraph

# ---------------------------------------------------------------------
# Graphviz DOT
# ---------------------------------------------------------------------
# digraph {
#   labelloc="t"
#   label="<pipeline>"
#   _end [shape="point" width=0.2]
#   _start [shape="point" width=0.2]
#   "_start" -> "first"
#   "first" -> "second"
#   "second" -> "_end"
# }
# ---------------------------------------------------------------------

# leading underscore: never a valid Tekton task name
START = "_start"
END = "_end"


def quote(text: str) -> str:
    """Double-quote a DOT id, escaping backslashes and quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class DOT:
    name: str
    edges: List[str] = field(default_factory=list)
    format: str = "digraph"

    def __str__(self) -> str:
        lines = [
            f"{self.format} {{",
            '  labelloc="t"',
            f"  label={quote(self.name)}",
            f'  {END} [shape="point" width=0.2]',
            f'  {START} [shape="point" width=0.2]',
        ]
        lines.extend(self.edges)
        lines.append("}")
        return "\n".join(lines) + "\n"


def _edge(src: str, dst: str) -> str:
    return f"  {quote(src)} -> {quote(dst)}"


def to_dot(graph: TaskGraph, with_task_ref: bool = False) -> DOT:
    dot = DOT(name=graph.pipeline_name)

    for node in graph.nodes.values():
        label = node.label(with_task_ref, sep="\n")
        if node.is_root:
            dot.edges.append(_edge(START, label))
        if node.is_leaf:
            dot.edges.append(_edge(label, END))
        for dep in graph.dependencies_of(node.name):
            dot.edges.append(_edge(label, dep.label(with_task_ref, sep="\n")))

    return dot


def render(graph: TaskGraph, with_task_ref: bool = False) -> str:
    return str(to_dot(graph, with_task_ref))
