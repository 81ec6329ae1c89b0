"""
Prompt endpoints.

POST /queue_prompt
    Body: {"prompt": {...}} or {"workflow": "<name>"}, plus optional
    `params`, top-level known keys (`seed`, `text_positive`, ...),
    `sets: ["3.inputs.seed=123"]`, `filename_prefix`, `verbose`.
    Applies overrides and submits the envelope to ComfyUI.

POST /construct_prompt
    Body: {"template": {...}, "inputs": {...}}; `{{key}}` substitution.
"""
from __future__ import annotations

from aiohttp import web

from cap_backend.features.overrides.applier import build_prompt_body
from cap_backend.features.templates.constructor import construct_prompt
from cap_backend.shared import Result, get_logger

from ..core import APP_KEY_CLIENT, APP_KEY_CONFIG, APP_KEY_NODE_KINDS, APP_KEY_STORE, _json_response, _read_json

logger = get_logger(__name__)


def register_prompt_routes(routes: web.RouteTableDef) -> None:
    @routes.post("/queue_prompt")
    async def queue_prompt(request: web.Request) -> web.Response:
        config = request.app[APP_KEY_CONFIG]
        body = await _read_json(request, max_bytes=config.max_json_bytes)
        if not body.ok or body.data is None:
            return _json_response(body)

        built = build_prompt_body(
            body.data,
            request.app[APP_KEY_STORE],
            config.default_filename_prefix,
            request.app[APP_KEY_NODE_KINDS],
        )
        if not built.ok or built.data is None:
            logger.warning("Rejected prompt request: %s", built.error)
            return _json_response(built)

        queued = await request.app[APP_KEY_CLIENT].queue_prompt(built.data)
        if not queued.ok:
            return _json_response(Result.Err(queued.code, queued.error or "Failed to queue prompt", **queued.meta))
        return _json_response(Result.Ok(queued.data, **built.meta))

    @routes.post("/construct_prompt")
    async def construct(request: web.Request) -> web.Response:
        body = await _read_json(request, max_bytes=request.app[APP_KEY_CONFIG].max_json_bytes)
        if not body.ok or body.data is None:
            return _json_response(body)
        if "template" not in body.data:
            return _json_response(Result.Err("INVALID_INPUT", "Template is required"))
        if "inputs" not in body.data:
            return _json_response(Result.Err("INVALID_INPUT", "Inputs are required"))
        return _json_response(construct_prompt(body.data["template"], body.data["inputs"]))
