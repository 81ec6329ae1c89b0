"""
Override pipeline.

Order matters and is fixed:
  1. text routing (`text_positive` / `text_negative`)
  2. known-parameter broadcast
  3. explicit path sets (highest precedence)
  4. `filename_prefix` default, only where absent
"""

from __future__ import annotations

import logging
from typing import Any

from ...shared import ErrorCode, Result, get_logger, log_structured
from .bundle import OverrideBundle
from ..workflows.store import WorkflowStore
from .envelope import PROMPT_KEY, resolve_prompt_root
from .filename_prefix import ensure_filename_prefix
from .node_kinds import NodeKinds, default_node_kinds
from .param_router import DEFAULT_PARAM_TABLE, ParamTable, apply_params_map
from .path_setter import SetPair, apply_set_path, format_path

logger = get_logger(__name__)


def apply_path_sets(root: dict[str, Any], path_sets: list[SetPair]) -> list[str]:
    """
    Apply path sets to the graph inside `root`, or to the envelope itself.

    A path whose first segment names an existing graph entry targets the
    graph only. Any other path targets the envelope (`client_id=...`,
    `extra_data.x=...`). Returns the paths that could not be applied.
    """
    graph = root.get(PROMPT_KEY)
    failed: list[str] = []
    for path, value in path_sets:
        if isinstance(graph, dict) and path and path[0] in graph:
            applied = apply_set_path(graph, path, value)
        else:
            applied = apply_set_path(root, path, value)
        if not applied:
            dotted = format_path(path)
            logger.warning("Could not apply override to path %s", dotted)
            failed.append(dotted)
    return failed


def apply_overrides(
    root: Any,
    bundle: OverrideBundle,
    kinds: NodeKinds | None = None,
    table: ParamTable = DEFAULT_PARAM_TABLE,
) -> Result[dict[str, Any]]:
    """Mutate the envelope `root` in place and return it."""
    if not isinstance(root, dict):
        return Result.Err(ErrorCode.INVALID_INPUT, "Request body must be an object")
    graph = root.get(PROMPT_KEY)
    if not isinstance(graph, dict):
        return Result.Err(ErrorCode.INVALID_INPUT, "Missing 'prompt' in body")

    kinds = kinds or default_node_kinds()
    text_targets = apply_params_map(graph, bundle.params, kinds, table) if bundle.params else None
    failed = apply_path_sets(root, bundle.path_sets)
    filled = ensure_filename_prefix(root.get(PROMPT_KEY), bundle.filename_prefix, kinds)

    if bundle.verbose:
        log_structured(logger, logging.INFO, "Constructed request body", body=root)

    warnings = [f"Could not apply override to path {p}" for p in failed]
    return Result.Ok(
        root,
        warnings=warnings,
        text_targets=text_targets.as_dict() if text_targets else None,
        filename_prefix_filled=filled,
    )


def build_prompt_body(
    payload: dict[str, Any],
    store: WorkflowStore | None,
    default_prefix: str,
    kinds: NodeKinds | None = None,
    table: ParamTable = DEFAULT_PARAM_TABLE,
) -> Result[dict[str, Any]]:
    """
    Turn a `/queue_prompt` body into the envelope ComfyUI expects.

    The bundle is parsed before the graph is loaded or mutated, so a
    malformed override never leaves a half-applied graph behind.
    """
    bundle = OverrideBundle.from_payload(payload, default_prefix=default_prefix, table=table)
    if not bundle.ok or bundle.data is None:
        return Result.Err(bundle.code, bundle.error or "Invalid overrides", **bundle.meta)
    root = resolve_prompt_root(payload, store)
    if not root.ok or root.data is None:
        return root
    return apply_overrides(root.data, bundle.data, kinds, table)
