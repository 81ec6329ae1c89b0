"""
History endpoints.

GET /get_history           raw ComfyUI history
GET /get_image?filename=   image bytes proxied from `/view`
GET /history[?prompt_id=]  one prompt id (or output filename) per line;
                           `?json=1` returns the raw history instead
"""
from __future__ import annotations

from aiohttp import web

from cap_backend.features.history import collect_filenames_for_id, collect_prompt_ids
from cap_backend.shared import Result
from cap_backend.utils import query_flag

from ..core import APP_KEY_CLIENT, _json_response, _text_lines_response


def register_history_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/get_history")
    async def get_history(request: web.Request) -> web.Response:
        return _json_response(await request.app[APP_KEY_CLIENT].get_history())

    @routes.get("/get_image")
    async def get_image(request: web.Request) -> web.Response:
        filename = (request.query.get("filename") or "").strip()
        if not filename:
            return _json_response(Result.Err("INVALID_INPUT", "Filename is required"))
        res = await request.app[APP_KEY_CLIENT].get_image(filename)
        if not res.ok:
            return _json_response(res)
        content_type = res.meta.get("content_type") or "application/octet-stream"
        return web.Response(body=res.data, content_type=content_type)

    @routes.get("/history")
    async def history_friendly(request: web.Request) -> web.Response:
        res = await request.app[APP_KEY_CLIENT].get_history()
        if not res.ok:
            return _json_response(res)
        if query_flag(request.query.get("json")):
            return _json_response(res)
        prompt_id = request.query.get("prompt_id")
        if prompt_id:
            return _text_lines_response(collect_filenames_for_id(res.data, prompt_id))
        return _text_lines_response(collect_prompt_ids(res.data))
