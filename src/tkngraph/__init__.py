__version__ = "0.1.0"

from .model import Task, TaskNode, TaskGraph
from .dag import build_task_graph
from .dispatch import FORMATS, FormatError, render_graph
from .emitter import OutputError, print_all_graphs, write_all_graphs

__all__ = [
    "Task", "TaskNode", "TaskGraph", "build_task_graph",
    "FORMATS", "FormatError", "render_graph",
    "OutputError", "print_all_graphs", "write_all_graphs",
]
