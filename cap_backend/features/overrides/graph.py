"""Graph access helpers: node inputs, links, passthrough walking and id ordering."""

from __future__ import annotations

from typing import Any

DEFAULT_MAX_PASSTHROUGH_HOPS = 50


def _node_type(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    ct = node.get("class_type")
    return ct if isinstance(ct, str) else ""


def _inputs(node: Any) -> dict[str, Any] | None:
    """Return the node's `inputs` object, or None when it is missing or not an object."""
    if not isinstance(node, dict):
        return None
    ins = node.get("inputs")
    return ins if isinstance(ins, dict) else None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_link(value: Any) -> bool:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return False
    src, slot = value[0], value[1]
    if not _is_int(slot):
        return False
    if _is_int(src):
        return True
    return isinstance(src, str) and src.strip() != ""


def _resolve_link(value: Any) -> tuple[str, int] | None:
    """Return `(node_id, slot)` for a link; integer ids are stringified."""
    if not _is_link(value):
        return None
    return str(value[0]).strip(), int(value[1])


def walk_passthrough(
    graph: dict[str, Any],
    start_link: Any,
    is_passthrough,
    max_hops: int = DEFAULT_MAX_PASSTHROUGH_HOPS,
) -> str | None:
    """
    Follow a link to its source node, skipping nodes for which
    `is_passthrough(node)` holds (Reroute and friends).
    """
    resolved = _resolve_link(start_link)
    if not resolved:
        return None
    node_id, _ = resolved
    hops = 0
    while hops < max_hops:
        hops += 1
        node = graph.get(node_id)
        if not isinstance(node, dict) or not is_passthrough(node):
            return node_id
        next_link = _next_passthrough_link(node)
        resolved = _resolve_link(next_link)
        if not resolved:
            return node_id
        node_id, _ = resolved
    return node_id


def _next_passthrough_link(node: dict[str, Any]) -> Any | None:
    ins = _inputs(node) or {}
    for key in ("", "input"):
        if _is_link(ins.get(key)):
            return ins[key]
    for val in ins.values():
        if _is_link(val):
            return val
    return None


def node_id_sort_key(node_id: str) -> tuple[int, tuple[int, ...], str]:
    """
    Numeric-aware ordering for node ids.

    Plain and subgraph ids ("2", "10", "5:3") order by their integer parts so
    "2" < "10"; anything else sorts after them lexicographically.
    """
    parts = str(node_id).split(":")
    if parts and all(p.isdigit() for p in parts):
        return 0, tuple(int(p) for p in parts), str(node_id)
    return 1, (), str(node_id)


def is_probably_graph(value: Any) -> bool:
    """True when at least one entry looks like a node (an object with a string `class_type`)."""
    if not isinstance(value, dict):
        return False
    return any(isinstance(node, dict) and isinstance(node.get("class_type"), str) for node in value.values())
