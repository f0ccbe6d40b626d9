"""Text codecs: one module per graph language, each exposing `render(graph, with_task_ref)`."""

from . import dot, mermaid, plantuml

__all__ = ["dot", "mermaid", "plantuml"]
