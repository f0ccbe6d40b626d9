# dag.py
from __future__ import annotations

from typing import Dict, Iterable, List

from .model import Task, TaskGraph, TaskNode


def build_task_graph(tasks: Iterable[Task], pipeline_name: str = "") -> TaskGraph:
    """
    Build a TaskGraph from Task objects.

    Requires:
      - task.name: str (unique)
      - task.run_after: iterable[str] (names of tasks that must run BEFORE this task)

    A run_after name with no matching task gets a placeholder node, so every
    edge points at a node of the graph. Cycles are not detected.
    """
    tasks = list(tasks)
    nodes: Dict[str, TaskNode] = {}

    # Pass 1: one node per task
    for task in tasks:
        nodes[task.name] = TaskNode(name=task.name, task_ref_name=task.task_ref_name)

    # Pass 2: edge dep -> task.name (dep must run before task)
    for task in tasks:
        for dep in task.run_after:
            dep_node = nodes.get(dep)
            if dep_node is None:
                dep_node = nodes[dep] = TaskNode(name=dep)
            dep_node.dependencies.append(task.name)
            nodes[task.name].is_root = False

    return TaskGraph(pipeline_name=pipeline_name, nodes=nodes)


def roots(graph: TaskGraph) -> List[str]:
    return [n.name for n in graph.nodes.values() if n.is_root]


def leaves(graph: TaskGraph) -> List[str]:
    return [n.name for n in graph.nodes.values() if n.is_leaf]
