# manifests.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .model import Task
from .settings import MANIFEST_SUFFIXES
from .ui.console import get_console


# -------------------- Schemas --------------------
# Only the fields the graph needs; everything else in a manifest is ignored.

class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TaskRef(_Model):
    name: str = ""


class PipelineTaskSpec(_Model):
    name: str
    task_ref: Optional[TaskRef] = Field(default=None, alias="taskRef")
    run_after: List[str] = Field(default_factory=list, alias="runAfter")

    @field_validator("run_after", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_task(self) -> Task:
        ref = self.task_ref.name if self.task_ref else ""
        return Task(name=self.name, task_ref_name=ref, run_after=tuple(self.run_after))


class PipelineSpec(_Model):
    tasks: List[PipelineTaskSpec] = Field(default_factory=list)
    # finally tasks have no runAfter and are not part of the DAG
    finally_tasks: List[PipelineTaskSpec] = Field(default_factory=list, alias="finally")

    @field_validator("tasks", "finally_tasks", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_tasks(self) -> List[Task]:
        return [t.to_task() for t in self.tasks]


class ObjectMeta(_Model):
    name: Optional[str] = None
    generate_name: Optional[str] = Field(default=None, alias="generateName")
    namespace: Optional[str] = None

    @property
    def display_name(self) -> str:
        # runs created with `tkn pipeline start` or `kubectl create` only carry generateName
        return self.name or self.generate_name or ""


class PipelineManifest(_Model):
    kind: Literal["Pipeline"]
    metadata: ObjectMeta
    spec: PipelineSpec = Field(default_factory=PipelineSpec)

    @property
    def name(self) -> str:
        return self.metadata.display_name


class PipelineRef(_Model):
    name: str


class PipelineRunSpec(_Model):
    pipeline_ref: Optional[PipelineRef] = Field(default=None, alias="pipelineRef")
    pipeline_spec: Optional[PipelineSpec] = Field(default=None, alias="pipelineSpec")


class PipelineRunManifest(_Model):
    kind: Literal["PipelineRun"]
    metadata: ObjectMeta
    spec: PipelineRunSpec = Field(default_factory=PipelineRunSpec)

    @property
    def name(self) -> str:
        return self.metadata.display_name


# -------------------- Loading --------------------

@dataclass
class ManifestError(Exception):
    path: str
    message: str
    details: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ManifestSet:
    pipelines: List[PipelineManifest] = field(default_factory=list)
    pipeline_runs: List[PipelineRunManifest] = field(default_factory=list)


def _expand(paths: Iterable[str | Path]) -> List[Path]:
    """Files as given; directories scanned (non-recursively) for manifest files."""
    out: List[Path] = []
    for p in map(Path, paths):
        if p.is_dir():
            out.extend(sorted(f for f in p.iterdir() if f.is_file() and f.suffix in MANIFEST_SUFFIXES))
        else:
            out.append(p)
    return out


def _error_lines(e: ValidationError) -> List[str]:
    return [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]


def _keep(manifest: PipelineManifest | PipelineRunManifest, into: list, path: Path) -> None:
    if not manifest.name:
        get_console().print_debug(f"{path}: skipping {manifest.kind} without name or generateName")
        return
    into.append(manifest)


def _add_document(doc: Any, path: Path, into: ManifestSet) -> None:
    console = get_console()

    if doc is None:
        return
    if not isinstance(doc, dict):
        raise ManifestError(str(path), f"expected a mapping, got {type(doc).__name__}")

    kind = doc.get("kind")
    try:
        if kind == "List":
            for item in doc.get("items") or []:
                _add_document(item, path, into)
        elif kind == "Pipeline":
            _keep(PipelineManifest.model_validate(doc), into.pipelines, path)
        elif kind == "PipelineRun":
            _keep(PipelineRunManifest.model_validate(doc), into.pipeline_runs, path)
        else:
            console.print_debug(f"{path}: skipping document of kind {kind!r}")
    except ValidationError as e:
        raise ManifestError(str(path), f"invalid {kind}", details=_error_lines(e)) from e


def load_manifests(paths: Iterable[str | Path]) -> ManifestSet:
    """
    Read every YAML/JSON document from `paths` (files or directories).

    Pipelines and PipelineRuns are kept in document order; other kinds are
    skipped, `kind: List` is expanded.
    """
    result = ManifestSet()
    for path in _expand(paths):
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestError(str(path), f"cannot read file: {e}") from e
        try:
            docs = list(yaml.safe_load_all(text))
        except yaml.YAMLError as e:
            raise ManifestError(str(path), f"invalid YAML: {e}") from e
        for doc in docs:
            _add_document(doc, path, result)
    return result
