"""
Locate the text-encoder nodes behind a sampler's `positive` / `negative` inputs.

Callers say "positive prompt" rather than "node 6"; the first sampler in the
graph is asked where its conditioning links come from. When there is no
sampler, a side is not linked, or the linked node cannot take a `text`
input, the side falls back to the text encoders in node-id order: the first
one is positive, the second negative. A side with no candidate is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...shared import get_logger
from .graph import _inputs, node_id_sort_key, walk_passthrough
from .node_kinds import NodeKinds, default_node_kinds

logger = get_logger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"
SIDES: tuple[str, ...] = (POSITIVE, NEGATIVE)
TEXT_INPUT_KEY = "text"


@dataclass
class TextTargets:
    positive: str | None = None
    negative: str | None = None
    sources: dict[str, str] = field(default_factory=dict)

    def get(self, side: str) -> str | None:
        return self.positive if side == POSITIVE else self.negative

    def set(self, side: str, node_id: str | None, source: str) -> None:
        if side == POSITIVE:
            self.positive = node_id
        else:
            self.negative = node_id
        if node_id is None:
            self.sources.pop(side, None)
        else:
            self.sources[side] = source

    def as_dict(self) -> dict[str, Any]:
        return {POSITIVE: self.positive, NEGATIVE: self.negative, "sources": dict(self.sources)}


def find_first_sampler(graph: dict[str, Any], kinds: NodeKinds) -> tuple[str, dict[str, Any]] | None:
    """First sampler in the graph's stored order; later samplers are ignored."""
    for node_id, node in graph.items():
        if isinstance(node, dict) and kinds.is_sampler(node):
            return str(node_id), node
    return None


def _linked_target(graph: dict[str, Any], sampler: dict[str, Any], side: str, kinds: NodeKinds) -> str | None:
    ins = _inputs(sampler)
    if ins is None:
        return None
    return walk_passthrough(graph, ins.get(side), kinds.is_passthrough)


def fallback_text_encoders(graph: dict[str, Any], kinds: NodeKinds) -> list[str]:
    ids = [str(node_id) for node_id, node in graph.items() if kinds.is_text_encoder(node)]
    return sorted(ids, key=node_id_sort_key)


def _fallback_for(side: str, candidates: list[str]) -> str | None:
    index = SIDES.index(side)
    return candidates[index] if index < len(candidates) else None


def resolve_text_targets(graph: Any, kinds: NodeKinds | None = None) -> TextTargets:
    """Resolve positive/negative target node ids without mutating the graph."""
    targets = TextTargets()
    if not isinstance(graph, dict):
        return targets
    kinds = kinds or default_node_kinds()
    sampler = find_first_sampler(graph, kinds)
    candidates = fallback_text_encoders(graph, kinds)
    for side in SIDES:
        linked = _linked_target(graph, sampler[1], side, kinds) if sampler else None
        if linked is not None:
            targets.set(side, linked, "link")
        else:
            targets.set(side, _fallback_for(side, candidates), "fallback")
    return targets


def _write_text(graph: dict[str, Any], node_id: str | None, value: Any) -> bool:
    if node_id is None:
        return False
    ins = _inputs(graph.get(node_id))
    if ins is None:
        return False
    ins[TEXT_INPUT_KEY] = value
    return True


def route_text(graph: Any, values: dict[str, Any], kinds: NodeKinds | None = None) -> TextTargets:
    """
    Write `values["positive"]` / `values["negative"]` into the resolved
    text encoders' `inputs.text`. Only sides present in `values` are touched.

    Returns the node ids actually written to.
    """
    written = TextTargets()
    if not isinstance(graph, dict) or not values:
        return written
    kinds = kinds or default_node_kinds()
    resolved = resolve_text_targets(graph, kinds)
    candidates: list[str] | None = None
    for side in SIDES:
        if side not in values:
            continue
        target = resolved.get(side)
        if _write_text(graph, target, values[side]):
            written.set(side, target, resolved.sources.get(side, "fallback"))
            continue
        if candidates is None:
            candidates = fallback_text_encoders(graph, kinds)
        fallback = _fallback_for(side, candidates)
        if fallback != target and _write_text(graph, fallback, values[side]):
            written.set(side, fallback, "fallback")
            continue
        logger.debug("No text target for %s prompt; value dropped", side)
    return written
