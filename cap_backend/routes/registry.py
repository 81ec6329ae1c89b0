"""
Route registration and application assembly.
"""

from __future__ import annotations

from aiohttp import web

from cap_backend.adapters.comfyui_client import ComfyUIClient
from cap_backend.config import ProxyConfig, load_config
from cap_backend.features.overrides.node_kinds import NodeKinds
from cap_backend.features.workflows.store import WorkflowStore
from cap_backend.shared import get_logger, request_id_var

from .core import APP_KEY_CLIENT, install_services
from .handlers import (
    register_history_routes,
    register_model_routes,
    register_prompt_routes,
    register_root_routes,
    register_workflow_routes,
)

logger = get_logger(__name__)
REQUEST_ID_HEADER = "X-Request-ID"


def register_all_routes() -> web.RouteTableDef:
    routes = web.RouteTableDef()
    register_root_routes(routes)
    register_prompt_routes(routes)
    register_workflow_routes(routes)
    register_history_routes(routes)
    register_model_routes(routes)
    return routes


@web.middleware
async def request_id_middleware(request: web.Request, handler):
    token = request_id_var.set(request.headers.get(REQUEST_ID_HEADER, "")[:64])
    try:
        return await handler(request)
    finally:
        request_id_var.reset(token)


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return response


async def _close_client(app: web.Application) -> None:
    await app[APP_KEY_CLIENT].close()


def build_app(
    config: ProxyConfig | None = None,
    client: ComfyUIClient | None = None,
    store: WorkflowStore | None = None,
    kinds: NodeKinds | None = None,
) -> web.Application:
    config = config or load_config()
    app = web.Application(middlewares=[request_id_middleware, cors_middleware], client_max_size=config.max_json_bytes)
    install_services(app, config, client=client, store=store, kinds=kinds)
    app.add_routes(register_all_routes())
    app.on_cleanup.append(_close_client)
    return app
