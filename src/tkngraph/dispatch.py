# dispatch.py
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .formats import dot, mermaid, plantuml
from .model import TaskGraph

Codec = Callable[[TaskGraph, bool], str]

# format identifier -> codec; also the file extension used by write_all_graphs
FORMATS: Mapping[str, Codec] = MappingProxyType({
    "dot": dot.render,
    "puml": plantuml.render,
    "mmd": mermaid.render,
})


class FormatError(ValueError):
    """Raised for an output format that is not one of FORMATS."""

    def __init__(self, output_format: str):
        self.output_format = output_format
        super().__init__(f"Invalid output format: {output_format}")


def resolve_format(output_format: str, codecs: Optional[Mapping[str, Codec]] = None) -> str:
    """Return the canonical (lower-case) format identifier."""
    codecs = FORMATS if codecs is None else codecs
    key = output_format.lower()
    if key not in codecs:
        raise FormatError(output_format)
    return key


def validate_output_format(output_format: str) -> None:
    """Pre-flight check, run before any manifest is read."""
    resolve_format(output_format)


def render_graph(
    graph: TaskGraph,
    output_format: str,
    with_task_ref: bool = False,
    codecs: Optional[Mapping[str, Codec]] = None,
) -> str:
    codecs = FORMATS if codecs is None else codecs
    return codecs[resolve_format(output_format, codecs)](graph, with_task_ref)
