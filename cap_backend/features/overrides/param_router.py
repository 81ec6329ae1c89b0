"""
Known-parameter routing.

`params` is a flat object such as `{"seed": 42, "text_positive": "a cat"}`.
Text-routed keys are resolved through the sampler links first; then each
broadcast key overwrites that input on every node that already has it.
Broadcast never adds an input a node does not have.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .coercion import coerce_value
from .graph import _inputs
from .link_resolver import NEGATIVE, POSITIVE, TextTargets, route_text
from .node_kinds import NodeKinds

ROUTE_BROADCAST = "broadcast"
ROUTE_POSITIVE = POSITIVE
ROUTE_NEGATIVE = NEGATIVE

HINT_NUMBER = "number"
HINT_STRING = "string"
HINT_ANY = "any"


@dataclass(frozen=True)
class KnownParam:
    name: str
    hint: str = HINT_ANY
    route: str = ROUTE_BROADCAST

    def coerce(self, raw: Any) -> Any:
        """Coerce a CLI string according to the hint; non-strings pass through."""
        if not isinstance(raw, str) or self.hint == HINT_STRING:
            return raw
        return coerce_value(raw)


class ParamTable:
    """Ordered registry of known parameters, keyed by name."""

    def __init__(self, params: Iterable[KnownParam]) -> None:
        self._params: dict[str, KnownParam] = {}
        for param in params:
            self._params[param.name] = param

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __iter__(self):
        return iter(self._params.values())

    def get(self, name: str) -> KnownParam | None:
        return self._params.get(name)

    def names(self) -> list[str]:
        return list(self._params)

    def with_params(self, *params: KnownParam) -> "ParamTable":
        return ParamTable([*self._params.values(), *params])

    def broadcast(self) -> list[KnownParam]:
        return [p for p in self._params.values() if p.route == ROUTE_BROADCAST]

    def text_routes(self) -> list[KnownParam]:
        return [p for p in self._params.values() if p.route in (ROUTE_POSITIVE, ROUTE_NEGATIVE)]


DEFAULT_PARAM_TABLE = ParamTable(
    [
        KnownParam("seed", HINT_NUMBER),
        KnownParam("steps", HINT_NUMBER),
        KnownParam("cfg", HINT_NUMBER),
        KnownParam("sampler_name", HINT_STRING),
        KnownParam("scheduler", HINT_STRING),
        KnownParam("denoise", HINT_NUMBER),
        KnownParam("width", HINT_NUMBER),
        KnownParam("height", HINT_NUMBER),
        KnownParam("batch_size", HINT_NUMBER),
        KnownParam("ckpt_name", HINT_STRING),
        KnownParam("text", HINT_STRING),
        KnownParam("text_positive", HINT_STRING, ROUTE_POSITIVE),
        KnownParam("text_negative", HINT_STRING, ROUTE_NEGATIVE),
    ]
)


def broadcast_params(graph: Any, params: dict[str, Any], table: ParamTable = DEFAULT_PARAM_TABLE) -> dict[str, list[str]]:
    """Overwrite existing inputs on every node; returns key -> updated node ids."""
    updated: dict[str, list[str]] = {}
    if not isinstance(graph, dict):
        return updated
    kvs = [(p.name, params[p.name]) for p in table.broadcast() if p.name in params]
    if not kvs:
        return updated
    for node_id, node in graph.items():
        ins = _inputs(node)
        if ins is None:
            continue
        for key, value in kvs:
            if key in ins:
                ins[key] = value
                updated.setdefault(key, []).append(str(node_id))
    return updated


def apply_params_map(
    graph: Any,
    params: Any,
    kinds: NodeKinds | None = None,
    table: ParamTable = DEFAULT_PARAM_TABLE,
) -> TextTargets:
    """
    Apply known params in place: text routing first, then broadcast.
    Unknown keys are ignored. Returns the text targets that were written.
    """
    if not isinstance(params, dict):
        return TextTargets()
    text_values = {p.route: params[p.name] for p in table.text_routes() if p.name in params}
    written = route_text(graph, text_values, kinds) if text_values else TextTargets()
    broadcast_params(graph, params, table)
    return written
