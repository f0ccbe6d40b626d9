# emitter.py
from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, List, Optional

from .dispatch import FormatError, render_graph, resolve_format
from .model import TaskGraph
from .ui.console import get_console


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class OutputError(Exception):
    """
    A batch item failed. `stage` says where:
      - "failed to generate output"
      - "failed to create directory <dir>"
      - "failed to write file <path>"
    """
    stage: str
    cause: Exception

    def __str__(self) -> str:
        return f"{self.stage}: {self.cause}"


def _render(graph: TaskGraph, output_format: str, with_task_ref: bool) -> str:
    try:
        return render_graph(graph, output_format, with_task_ref)
    except FormatError as e:
        raise OutputError("failed to generate output", e) from e


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def print_all_graphs(
    graphs: Iterable[TaskGraph],
    output_format: str,
    with_task_ref: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Render every graph, in order, to one stream (stdout by default).
    Stops at the first failure.
    """
    out = stream if stream is not None else sys.stdout
    for graph in graphs:
        text = _render(graph, output_format, with_task_ref)
        print(text, file=out)


def write_all_graphs(
    graphs: Iterable[TaskGraph],
    output_format: str,
    output_dir: str | Path,
    with_task_ref: bool = False,
) -> List[Path]:
    """
    Write each graph to `<output_dir>/<pipeline_name>.<format>`.

    The directory is created if missing. Stops at the first failure; files
    written before it are left in place. Returns the written paths.
    """
    console = get_console()
    out_dir = Path(output_dir)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"failed to create directory {out_dir}", e) from e

    written: List[Path] = []
    for graph in graphs:
        text = _render(graph, output_format, with_task_ref)
        path = out_dir / f"{graph.pipeline_name}.{resolve_format(output_format)}"
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"failed to write file {path}", e) from e
        console.print_debug(f"wrote {path}")
        written.append(path)

    return written
