# formats/mermaid.py
from __future__ import annotations

from typing import List

from ..model import TaskGraph, TaskNode

# leading underscore: never a valid Tekton task name
START = "_start([fa:fa-circle])"
STOP = "_stop([fa:fa-circle])"
INDENT = "   "


def _node(node: TaskNode, with_task_ref: bool) -> str:
    """Bare id, or id("name\n   (ref)") when annotating."""
    if not with_task_ref or not node.task_ref_name:
        return node.name
    label = node.label(with_task_ref=True, sep="\n" + INDENT).replace('"', "#quot;")
    return f'{node.name}("{label}")'


def render(graph: TaskGraph, with_task_ref: bool = False) -> str:
    """Render a TaskGraph as a top-down Mermaid flowchart."""
    lines: List[str] = [
        "---",
        f"title: {graph.pipeline_name}",
        "---",
        "flowchart TD",
    ]

    for node in graph.nodes.values():
        this = _node(node, with_task_ref)
        if node.is_root:
            lines.append(f"{INDENT}{START} --> {this}")
        if node.is_leaf:
            lines.append(f"{INDENT}{this} --> {STOP}")
        for dep in graph.dependencies_of(node.name):
            lines.append(f"{INDENT}{this} --> {_node(dep, with_task_ref)}")

    return "\n".join(lines) + "\n"
