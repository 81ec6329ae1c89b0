"""
JSON request parsing with a size cap. Never raises to handlers.
"""

from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from cap_backend.config import DEFAULT_MAX_JSON_BYTES
from cap_backend.shared import ErrorCode, Result

MIN_JSON_BYTES = 1024
REQUEST_STREAM_CHUNK_BYTES = 64 * 1024


def _content_length_error(request: web.Request, limit: int) -> Result[dict] | None:
    raw = request.headers.get("Content-Length")
    if not raw:
        return None
    try:
        size = int(raw)
    except ValueError:
        return None
    if size <= limit:
        return None
    return Result.Err(ErrorCode.INVALID_INPUT, f"JSON body too large ({size} > {limit})", limit=limit, size=size)


async def _read_request_body_limited(request: web.Request, limit: int) -> Result[bytes]:
    buf = bytearray()
    try:
        async for chunk in request.content.iter_chunked(REQUEST_STREAM_CHUNK_BYTES):
            buf.extend(chunk)
            if len(buf) > limit:
                return Result.Err(ErrorCode.INVALID_INPUT, f"JSON body too large (> {limit})", limit=limit)
    except Exception as exc:
        return Result.Err(ErrorCode.INVALID_JSON, f"Failed to read request body: {exc}")
    return Result.Ok(bytes(buf))


def _decode_and_parse_json_dict(body: bytes) -> Result[dict]:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        return Result.Err(ErrorCode.INVALID_JSON, f"Invalid UTF-8 JSON body: {exc}")
    try:
        parsed: Any = json.loads(text) if text else {}
    except ValueError as exc:
        return Result.Err(ErrorCode.INVALID_JSON, f"Invalid JSON body: {exc}")
    if not isinstance(parsed, dict):
        return Result.Err(ErrorCode.INVALID_JSON, "JSON body must be an object")
    return Result.Ok(parsed)


async def _read_json(request: web.Request, *, max_bytes: int | None = None) -> Result[dict]:
    limit = max(MIN_JSON_BYTES, int(max_bytes) if max_bytes is not None else DEFAULT_MAX_JSON_BYTES)
    length_error = _content_length_error(request, limit)
    if length_error is not None:
        return length_error
    body = await _read_request_body_limited(request, limit)
    if not body.ok:
        return Result.Err(body.code, body.error or "Invalid request body", **body.meta)
    return _decode_and_parse_json_dict(body.data or b"")
