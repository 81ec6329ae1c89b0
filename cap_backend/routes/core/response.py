"""
Response utilities for route handlers.
"""

import math

from aiohttp import web

from cap_backend.shared import Result


def _json_response(result: Result, status: int | None = None) -> web.Response:
    """
    Convert a Result to the `{ok, data, error, code, meta}` JSON envelope.

    Business and validation errors are HTTP 200 with `ok: false`; an explicit
    status is reserved for genuine server faults.
    """
    payload = _sanitize_json_payload(
        {
            "ok": result.ok,
            "data": result.data,
            "error": result.error,
            "code": result.code,
            "meta": result.meta,
        }
    )
    return web.json_response(payload, status=200 if status is None else status)


def _text_lines_response(lines: list[str]) -> web.Response:
    body = "".join(f"{line}\n" for line in lines)
    return web.Response(text=body, content_type="text/plain")


def _sanitize_json_payload(value):
    """Replace NaN/Infinity with None so the payload is strict JSON."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_payload(v) for v in value]
    return value
