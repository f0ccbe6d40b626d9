from __future__ import annotations
import os


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


DEFAULT_OUTPUT_FORMAT = os.environ.get("TKN_GRAPH_OUTPUT_FORMAT", "dot")
DEFAULT_OUTPUT_DIR = os.environ.get("TKN_GRAPH_OUTPUT_DIR", "")
WITH_TASK_REF = _flag("TKN_GRAPH_WITH_TASK_REF")
DEBUG = _flag("TKN_GRAPH_DEBUG")
MANIFEST_SUFFIXES = (".yaml", ".yml", ".json")
