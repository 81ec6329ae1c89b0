"""
Thin aiohttp client for the ComfyUI REST endpoints the proxy uses.

Every call returns a `Result`; transport problems never escape as exceptions.
"""
from __future__ import annotations

import asyncio
import re
from typing import Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from ..config import DEFAULT_HTTP_TIMEOUT
from ..shared import ErrorCode, Result, get_logger, sanitize_error_message

logger = get_logger(__name__)

_SAFE_CATEGORY_RE = re.compile(r"^[A-Za-z0-9_-]+$")
ERROR_BODY_EXCERPT_CHARS = 500


def is_safe_model_category(category: str) -> bool:
    return bool(category) and bool(_SAFE_CATEGORY_RE.match(category))


class ComfyUIClient:
    def __init__(self, base_url: str, timeout: float = DEFAULT_HTTP_TIMEOUT, session: ClientSession | None = None) -> None:
        self.base_url = str(base_url or "").rstrip("/")
        self.timeout = ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "ComfyUIClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        what: str,
        json_body: Any = None,
        params: dict[str, str] | None = None,
        as_bytes: bool = False,
    ) -> Result[Any]:
        url = self._url(path)
        session = await self._get_session()
        try:
            async with session.request(method, url, json=json_body, params=params) as resp:
                if resp.status < 200 or resp.status >= 300:
                    body = await resp.text()
                    message = f"Failed to {what}. Status: {resp.status}, Body: {body[:ERROR_BODY_EXCERPT_CHARS]}"
                    logger.error(message)
                    return Result.Err(ErrorCode.UPSTREAM_ERROR, message, status=resp.status)
                if as_bytes:
                    return Result.Ok(await resp.read(), content_type=resp.content_type)
                return Result.Ok(await resp.json(content_type=None))
        except asyncio.TimeoutError:
            logger.warning("Timeout while trying to %s at %s", what, url)
            return Result.Err(ErrorCode.TIMEOUT, f"Timeout while trying to {what}")
        except (ClientError, ValueError) as exc:
            logger.error("Failed to %s at %s: %s", what, url, exc)
            return Result.Err(ErrorCode.UPSTREAM_ERROR, sanitize_error_message(exc, f"Failed to {what}"))

    async def queue_prompt(self, body: dict[str, Any]) -> Result[Any]:
        """POST an envelope to `/prompt`; returns ComfyUI's JSON reply."""
        logger.info("Sending prompt to ComfyUI at %s", self._url("prompt"))
        res = await self._request("POST", "prompt", what="queue prompt", json_body=body)
        if res.ok:
            logger.info("Successfully queued prompt: %s", res.data)
        return res

    async def get_image(self, filename: str) -> Result[Any]:
        return await self._request("GET", "view", what="get image", params={"filename": filename}, as_bytes=True)

    async def get_history(self) -> Result[Any]:
        return await self._request("GET", "history", what="get history")

    async def get_model_categories(self) -> Result[Any]:
        return await self._request("GET", "models", what="list model categories")

    async def get_models_in_category(self, category: str) -> Result[Any]:
        if not is_safe_model_category(category):
            return Result.Err(ErrorCode.INVALID_INPUT, "Invalid model category")
        return await self._request("GET", f"models/{category}", what=f"list models in '{category}'")

    async def get_checkpoints(self) -> Result[Any]:
        """`/models/checkpoints` is where `ckpt_name` values come from."""
        return await self.get_models_in_category("checkpoints")
