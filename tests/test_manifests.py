"""Tests for reading Tekton manifests from YAML/JSON files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tkngraph.manifests import ManifestError, load_manifests
from tkngraph.model import Task
from tkngraph.sources import PipelineRunSource, PipelineSource

PIPELINE_YAML = """\
apiVersion: tekton.dev/v1
kind: Pipeline
metadata:
  name: build-and-deploy
  namespace: ci
spec:
  params:
    - name: revision
  tasks:
    - name: fetch-source
      taskRef:
        name: git-clone
    - name: build
      taskRef:
        name: buildah
      runAfter:
        - fetch-source
    - name: inline
      taskSpec:
        steps:
          - image: alpine
      runAfter: null
  finally:
    - name: notify
      taskRef:
        name: send-to-slack
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: ignored
---
"""


def test_load_pipeline(tmp_path: Path) -> None:
    path = tmp_path / "pipeline.yaml"
    path.write_text(PIPELINE_YAML)

    manifests = load_manifests([path])

    assert manifests.pipeline_runs == []
    assert len(manifests.pipelines) == 1
    pipeline = manifests.pipelines[0]
    assert pipeline.name == "build-and-deploy"
    assert pipeline.metadata.namespace == "ci"
    assert [t.name for t in pipeline.spec.finally_tasks] == ["notify"]
    assert pipeline.spec.to_tasks() == [
        Task("fetch-source", "git-clone", ()),
        Task("build", "buildah", ("fetch-source",)),
        Task("inline", "", ()),
    ]


def test_load_json_and_list(tmp_path: Path) -> None:
    doc = {
        "apiVersion": "v1",
        "kind": "List",
        "items": [
            {"kind": "Pipeline", "metadata": {"name": "p1"}, "spec": {"tasks": [{"name": "a"}]}},
            {
                "kind": "PipelineRun",
                "metadata": {"name": "p1-run-1"},
                "spec": {"pipelineRef": {"name": "p1"}},
            },
        ],
    }
    path = tmp_path / "list.json"
    path.write_text(json.dumps(doc))

    manifests = load_manifests([str(path)])
    assert [p.name for p in manifests.pipelines] == ["p1"]
    assert [r.name for r in manifests.pipeline_runs] == ["p1-run-1"]
    assert manifests.pipeline_runs[0].spec.pipeline_ref.name == "p1"


def test_load_directory_sorted(tmp_path: Path) -> None:
    (tmp_path / "b.yml").write_text("kind: Pipeline\nmetadata: {name: b}\n")
    (tmp_path / "a.yaml").write_text("kind: Pipeline\nmetadata: {name: a}\n")
    (tmp_path / "notes.txt").write_text("kind: Pipeline\nmetadata: {name: txt}\n")

    manifests = load_manifests([tmp_path])
    assert [p.name for p in manifests.pipelines] == ["a", "b"]
    assert manifests.pipelines[0].spec.tasks == []


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError) as exc_info:
        load_manifests([tmp_path / "nope.yaml"])
    assert "cannot read file" in str(exc_info.value)


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("kind: Pipeline\nmetadata: [unclosed\n")
    with pytest.raises(ManifestError) as exc_info:
        load_manifests([path])
    assert exc_info.value.path == str(path)
    assert "invalid YAML" in exc_info.value.message


def test_invalid_pipeline(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("kind: Pipeline\nmetadata: {name: p}\nspec:\n  tasks:\n    - taskRef: {name: x}\n")
    with pytest.raises(ManifestError) as exc_info:
        load_manifests([path])
    assert "invalid Pipeline" in exc_info.value.message
    assert exc_info.value.details == ["spec.tasks.0.name: Field required"]


def test_non_mapping_document(tmp_path: Path) -> None:
    path = tmp_path / "scalar.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ManifestError):
        load_manifests([path])


def test_generate_name_run_does_not_abort_load(tmp_path: Path) -> None:
    (tmp_path / "pipeline.yaml").write_text(
        "kind: Pipeline\nmetadata: {name: build}\nspec:\n  tasks:\n    - name: clone\n"
    )
    (tmp_path / "run.yaml").write_text(
        "kind: PipelineRun\nmetadata: {generateName: build-run-}\nspec:\n  pipelineRef: {name: build}\n"
    )

    manifests = load_manifests([tmp_path])

    assert PipelineSource(manifests).get_by_name("build").tasks == [Task("clone")]
    run = manifests.pipeline_runs[0]
    assert run.metadata.name is None
    assert run.name == "build-run-"
    assert PipelineRunSource(manifests).get_by_name("build-run-").tasks == [Task("clone")]


def test_nameless_documents_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "nameless.yaml"
    path.write_text(
        "kind: Pipeline\nmetadata: {namespace: ci}\n"
        "---\n"
        "kind: PipelineRun\nmetadata: {}\nspec:\n  pipelineRef: {name: x}\n"
    )

    manifests = load_manifests([path])
    assert manifests.pipelines == []
    assert manifests.pipeline_runs == []
