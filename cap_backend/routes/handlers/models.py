"""
Model listing endpoints. Plain text (one name per line) unless `?json=1`.
"""
from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from cap_backend.utils import query_flag

from ..core import APP_KEY_CLIENT, _json_response, _text_lines_response


def _model_lines(items: list[Any]) -> list[str]:
    lines: list[str] = []
    for item in items:
        if isinstance(item, str):
            lines.append(item)
        elif isinstance(item, dict) and isinstance(item.get("name"), str):
            lines.append(item["name"])
        else:
            lines.append(json.dumps(item))
    return lines


def _listing_response(request: web.Request, res) -> web.Response:
    if not res.ok or query_flag(request.query.get("json")):
        return _json_response(res)
    if isinstance(res.data, list):
        return _text_lines_response(_model_lines(res.data))
    return web.Response(text=json.dumps(res.data, indent=2), content_type="text/plain")


def register_model_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/models")
    async def models_categories(request: web.Request) -> web.Response:
        return _listing_response(request, await request.app[APP_KEY_CLIENT].get_model_categories())

    @routes.get("/models/checkpoints")
    async def models_checkpoints(request: web.Request) -> web.Response:
        return _listing_response(request, await request.app[APP_KEY_CLIENT].get_checkpoints())

    @routes.get("/models/{category}")
    async def models_in_category(request: web.Request) -> web.Response:
        category = request.match_info.get("category", "")
        return _listing_response(request, await request.app[APP_KEY_CLIENT].get_models_in_category(category))
