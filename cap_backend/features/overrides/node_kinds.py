"""
Capability lookup for node `class_type` strings.

The override engine never compares class names directly; it asks a
`NodeKinds` registry whether a node has a capability. Custom node packs can
be supported by registering extra class types.
"""

from __future__ import annotations

from typing import Any, Iterable

from .graph import _node_type

SAMPLER = "sampler"
TEXT_ENCODER = "text_encoder"
FILE_OUTPUT = "file_output"
PASSTHROUGH = "passthrough"

CAPABILITIES: frozenset[str] = frozenset({SAMPLER, TEXT_ENCODER, FILE_OUTPUT, PASSTHROUGH})

_DEFAULT_KINDS: dict[str, frozenset[str]] = {
    "KSampler": frozenset({SAMPLER}),
    "CLIPTextEncode": frozenset({TEXT_ENCODER}),
    "SaveImage": frozenset({FILE_OUTPUT}),
    "Reroute": frozenset({PASSTHROUGH}),
}


class NodeKinds:
    """Mapping of class_type to capability set."""

    def __init__(self, kinds: dict[str, Iterable[str]] | None = None) -> None:
        self._kinds: dict[str, frozenset[str]] = {}
        for class_type, caps in (kinds if kinds is not None else _DEFAULT_KINDS).items():
            self.register(class_type, *caps)

    def register(self, class_type: str, *capabilities: str) -> None:
        unknown = set(capabilities) - CAPABILITIES
        if unknown:
            raise ValueError(f"Unknown node capabilities: {sorted(unknown)}")
        current = self._kinds.get(class_type, frozenset())
        self._kinds[class_type] = current | frozenset(capabilities)

    def capabilities(self, node: Any) -> frozenset[str]:
        return self._kinds.get(_node_type(node), frozenset())

    def has(self, node: Any, capability: str) -> bool:
        return capability in self.capabilities(node)

    def is_sampler(self, node: Any) -> bool:
        return self.has(node, SAMPLER)

    def is_text_encoder(self, node: Any) -> bool:
        return self.has(node, TEXT_ENCODER)

    def produces_file(self, node: Any) -> bool:
        return self.has(node, FILE_OUTPUT)

    def is_passthrough(self, node: Any) -> bool:
        return self.has(node, PASSTHROUGH)


def default_node_kinds() -> NodeKinds:
    """Fresh registry with the stock ComfyUI class types."""
    return NodeKinds()
