"""Default `filename_prefix` for file-producing nodes."""

from __future__ import annotations

from typing import Any

from .graph import _inputs
from .node_kinds import NodeKinds, default_node_kinds

FILENAME_PREFIX_KEY = "filename_prefix"


def ensure_filename_prefix(graph: Any, default_prefix: str, kinds: NodeKinds | None = None) -> list[str]:
    """
    Insert `filename_prefix` on every file-output node whose inputs lack it.

    Existing values are never overwritten; nodes without an `inputs` object
    or without a `class_type` are skipped. Returns the ids that were filled.
    """
    if not isinstance(graph, dict):
        return []
    kinds = kinds or default_node_kinds()
    filled: list[str] = []
    for node_id, node in graph.items():
        if not kinds.produces_file(node):
            continue
        ins = _inputs(node)
        if ins is None or FILENAME_PREFIX_KEY in ins:
            continue
        ins[FILENAME_PREFIX_KEY] = str(default_prefix)
        filled.append(str(node_id))
    return filled
