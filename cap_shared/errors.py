"""
Helpers for sanitizing error messages before they reach clients.
"""
from __future__ import annotations

import os
import re
from typing import Any

from .log import get_logger

logger = get_logger(__name__)
_DEBUG_MODE = os.getenv("CAP_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
_WINDOWS_PATH_RE = re.compile(r"[A-Za-z]:\\[^\s]+")
_UNIX_PATH_RE = re.compile(r"(?<![A-Za-z0-9:/?&=#%])/(?!/)[^\s#?]+")
MAX_MESSAGE_CHARS = 200


def _mask_paths(value: str) -> str:
    cleaned = _WINDOWS_PATH_RE.sub("[path]", value)
    return _UNIX_PATH_RE.sub("[path]", cleaned)


def sanitize_error_message(exc: Any, fallback: str) -> str:
    """
    Build a safe error message for clients.

    Filesystem paths are masked and the message is collapsed to one line,
    truncated to MAX_MESSAGE_CHARS characters.
    """
    if not fallback:
        fallback = "An error occurred"
    if exc is None:
        return fallback

    raw = str(exc)
    if not raw:
        return fallback

    sanitized = _mask_paths(raw.replace(os.getcwd(), "[cwd]"))
    sanitized = " ".join(sanitized.splitlines()).strip()

    if _DEBUG_MODE:
        logger.debug("Sanitized error payload: %s", sanitized)

    if sanitized:
        return f"{fallback}: {sanitized[:MAX_MESSAGE_CHARS]}"
    return fallback
