from __future__ import annotations

import pytest

from tkngraph.dag import build_task_graph
from tkngraph.model import Task, TaskGraph
from tkngraph.ui.console import Console, set_console

PIPELINE_NAME = "test-pipeline"


@pytest.fixture(autouse=True)
def quiet_console():
    set_console(Console(debug=False))
    yield
    set_console(Console(debug=False))


@pytest.fixture
def tasks() -> list[Task]:
    return [
        Task("task1", "taskRef1", ("task2", "task3")),
        Task("task2", "taskRef2", ("task3",)),
        Task("task3", "taskRef3"),
        # a task without any dependencies
        Task("task-with-dash", "taskRef4"),
    ]


@pytest.fixture
def graph(tasks) -> TaskGraph:
    return build_task_graph(tasks, pipeline_name=PIPELINE_NAME)
