# formats/plantuml.py
from __future__ import annotations

from typing import Dict, List

from ..model import TaskGraph

TERMINAL = "[*]"


def state_id(name: str) -> str:
    # PlantUML state identifiers cannot contain dashes
    return name.replace("-", "_")


def render(graph: TaskGraph, with_task_ref: bool = False) -> str:
    """
    Render a TaskGraph as a PlantUML state diagram.

    Start and end both use the built-in `[*]` terminal state. With
    `with_task_ref`, each state gets a description line `id : name (ref)`,
    keeping the dashed task name in the visible text.
    """
    lines: List[str] = [
        "@startuml",
        "hide empty description",
        f"title {graph.pipeline_name}",
        "",
    ]
    descriptions: Dict[str, str] = {}

    for node in graph.nodes.values():
        sid = state_id(node.name)
        if node.is_root:
            lines.append(f"{TERMINAL} --> {sid}")
        if node.is_leaf:
            lines.append(f"{sid} --> {TERMINAL}")
        for dep in node.dependencies:
            lines.append(f"{sid} -down-> {state_id(dep)}")
        if with_task_ref:
            # first node wins when two names collapse onto one id
            descriptions.setdefault(sid, node.label(with_task_ref=True))

    if descriptions:
        lines.append("")
        lines.extend(f"{sid} : {text}" for sid, text in descriptions.items())

    lines.extend(["", "@enduml"])
    return "\n".join(lines) + "\n"
