"""
Envelope handling: ComfyUI's `/prompt` endpoint wants `{"prompt": graph, ...}`.
"""

from __future__ import annotations

import copy
from typing import Any

from ...shared import ErrorCode, Result
from ..workflows.store import WorkflowStore

PROMPT_KEY = "prompt"


def wrap_envelope(document: Any) -> dict[str, Any]:
    """Return `document` when it is already an envelope, else `{"prompt": document}`."""
    if isinstance(document, dict) and PROMPT_KEY in document:
        return document
    return {PROMPT_KEY: document}


def graph_of(root: Any) -> Any:
    if isinstance(root, dict):
        return root.get(PROMPT_KEY)
    return None


def resolve_prompt_root(payload: dict[str, Any], store: WorkflowStore | None) -> Result[dict[str, Any]]:
    """
    Build the request envelope from an inline `prompt` or a named `workflow`.

    Inline graphs are deep-copied; the caller's payload is never mutated.
    """
    if PROMPT_KEY in payload:
        return Result.Ok({PROMPT_KEY: copy.deepcopy(payload[PROMPT_KEY])})

    name = payload.get("workflow")
    if not isinstance(name, str) or not name.strip():
        return Result.Err(ErrorCode.INVALID_INPUT, "Either 'prompt' or 'workflow' must be provided")
    if store is None:
        return Result.Err(ErrorCode.INVALID_INPUT, "Workflow templates are not configured")

    loaded = store.load(name)
    if not loaded.ok:
        return Result.Err(loaded.code, loaded.error or "Failed to load workflow", **loaded.meta)
    return Result.Ok(wrap_envelope(loaded.data))
