"""Graph override engine."""
from .applier import apply_overrides, apply_path_sets, build_prompt_body
from .bundle import OverrideBundle
from .coercion import coerce_value
from .envelope import resolve_prompt_root, wrap_envelope
from .filename_prefix import ensure_filename_prefix
from .graph import is_probably_graph
from .link_resolver import TextTargets, resolve_text_targets, route_text
from .node_kinds import NodeKinds, default_node_kinds
from .param_router import DEFAULT_PARAM_TABLE, KnownParam, ParamTable, apply_params_map, broadcast_params
from .path_setter import apply_set_path, parse_set_pairs

__all__ = [
    "DEFAULT_PARAM_TABLE",
    "KnownParam",
    "NodeKinds",
    "OverrideBundle",
    "ParamTable",
    "TextTargets",
    "apply_overrides",
    "apply_params_map",
    "apply_path_sets",
    "apply_set_path",
    "broadcast_params",
    "build_prompt_body",
    "coerce_value",
    "default_node_kinds",
    "ensure_filename_prefix",
    "is_probably_graph",
    "parse_set_pairs",
    "resolve_prompt_root",
    "resolve_text_targets",
    "route_text",
    "wrap_envelope",
]
