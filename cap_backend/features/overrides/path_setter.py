"""
Dot-path overrides (`2.inputs.seed=123`).

Parsing is all-or-nothing: one item without `=` rejects the whole batch
before anything is applied. Application never raises; a path that cannot be
applied returns False and the caller decides whether to retry or warn.
"""

from __future__ import annotations

from typing import Any, Sequence

from ...shared import ErrorCode, Result
from .coercion import coerce_value

SetPair = tuple[list[str], Any]


def parse_set_item(item: str) -> SetPair | None:
    key, sep, raw_value = item.partition("=")
    if not sep:
        return None
    return key.split("."), coerce_value(raw_value)


def parse_set_pairs(items: Sequence[str]) -> Result[list[SetPair]]:
    """Parse `KEY=VALUE` strings; the first malformed item fails the batch."""
    out: list[SetPair] = []
    for item in items:
        pair = parse_set_item(item)
        if pair is None:
            return Result.Err(
                ErrorCode.MALFORMED_OVERRIDE,
                f"Invalid set '{item}', expected KEY=VALUE",
                item=item,
            )
        out.append(pair)
    return Result.Ok(out)


def apply_set_path(root: Any, path: Sequence[str], value: Any) -> bool:
    """
    Set `root[path[0]]...[path[-1]] = value`.

    Missing intermediate keys are created as empty objects. Stepping into a
    non-object intermediate, or a non-object parent for the last key, returns
    False. Objects created before such a failure stay in the tree.
    """
    if not path:
        return False
    cur = root
    for key in path[:-1]:
        if not isinstance(cur, dict):
            return False
        if key not in cur:
            cur[key] = {}
        cur = cur[key]
    if not isinstance(cur, dict):
        return False
    cur[path[-1]] = value
    return True


def get_path(root: Any, path: Sequence[str], default: Any = None) -> Any:
    cur = root
    for key in path:
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def format_path(path: Sequence[str]) -> str:
    return ".".join(path)
