# sources.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .dag import build_task_graph, leaves, roots
from .manifests import ManifestSet, PipelineManifest, PipelineRunManifest, PipelineSpec
from .model import Task, TaskGraph
from .ui.console import get_console


@dataclass
class SourceError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class GraphData:
    """Graph name plus the tasks it is built from. For a run, name is the run's name."""
    name: str
    tasks: List[Task] = field(default_factory=list)


class PipelineSource:
    """Pipelines found in a set of manifests."""

    def __init__(self, manifests: ManifestSet):
        self.manifests = manifests

    def by_name(self) -> Dict[str, PipelineManifest]:
        # later documents override earlier ones with the same name
        return {p.name: p for p in self.manifests.pipelines}

    def get_by_name(self, name: str) -> GraphData:
        pipeline = self.by_name().get(name)
        if pipeline is None:
            raise SourceError(f"Pipeline {name!r} not found. Known Pipelines: {sorted(self.by_name())}")
        return GraphData(name=pipeline.name, tasks=pipeline.spec.to_tasks())

    def get_all(self) -> List[GraphData]:
        if not self.manifests.pipelines:
            raise SourceError("no Pipelines found")
        return [GraphData(name=p.name, tasks=p.spec.to_tasks()) for p in self.manifests.pipelines]


class PipelineRunSource:
    """
    PipelineRuns found in a set of manifests.

    A run is graphed from its embedded pipelineSpec, or else from the
    Pipeline its pipelineRef names, which must be among the manifests.
    """

    def __init__(self, manifests: ManifestSet):
        self.manifests = manifests
        self.pipelines = PipelineSource(manifests)

    def _spec_of(self, run: PipelineRunManifest) -> PipelineSpec:
        if run.spec.pipeline_spec is not None:
            return run.spec.pipeline_spec
        if run.spec.pipeline_ref is None:
            raise SourceError(f"PipelineRun {run.name!r} has neither pipelineRef nor pipelineSpec")

        ref = run.spec.pipeline_ref.name
        pipeline = self.pipelines.by_name().get(ref)
        if pipeline is None:
            raise SourceError(f"failed to get Pipeline {ref!r} referenced by PipelineRun {run.name!r}")
        return pipeline.spec

    def get_by_name(self, name: str) -> GraphData:
        for run in reversed(self.manifests.pipeline_runs):
            if run.name == name:
                return GraphData(name=run.name, tasks=self._spec_of(run).to_tasks())
        known = sorted({r.name for r in self.manifests.pipeline_runs})
        raise SourceError(f"PipelineRun {name!r} not found. Known PipelineRuns: {known}")

    def get_all(self) -> List[GraphData]:
        if not self.manifests.pipeline_runs:
            raise SourceError("no PipelineRuns found")
        return [GraphData(name=r.name, tasks=self._spec_of(r).to_tasks()) for r in self.manifests.pipeline_runs]


def build_graphs(data: Iterable[GraphData]) -> List[TaskGraph]:
    console = get_console()
    graphs: List[TaskGraph] = []
    for item in data:
        graph = build_task_graph(item.tasks, pipeline_name=item.name)
        console.print_graph_summary(graph.pipeline_name, len(graph.nodes), roots(graph), leaves(graph))
        graphs.append(graph)
    return graphs
