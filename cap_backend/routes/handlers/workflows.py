from __future__ import annotations

from aiohttp import web

from cap_backend.shared import Result

from ..core import APP_KEY_CONFIG, APP_KEY_STORE, _json_response, _read_json


def register_workflow_routes(routes: web.RouteTableDef) -> None:
    @routes.post("/add_workflow")
    async def add_workflow(request: web.Request) -> web.Response:
        body = await _read_json(request, max_bytes=request.app[APP_KEY_CONFIG].max_json_bytes)
        if not body.ok or body.data is None:
            return _json_response(body)
        name = body.data.get("name")
        workflow = body.data.get("workflow")
        if name is None or workflow is None:
            return _json_response(Result.Err("INVALID_INPUT", "Both 'name' and 'workflow' must be provided"))
        saved = request.app[APP_KEY_STORE].save(name, workflow)
        if not saved.ok:
            return _json_response(saved)
        return _json_response(Result.Ok({"status": "success", "name": saved.data}))

    @routes.get("/workflows")
    async def list_workflows(request: web.Request) -> web.Response:
        return _json_response(Result.Ok(request.app[APP_KEY_STORE].list_names()))
