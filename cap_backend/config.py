"""
Configuration for the ComfyUI API Proxy.

Values come from the process environment. Entry points call `load_dotenv()`
first so a local `.env` file is honoured. Invalid values never raise: they are
logged and replaced by the default.
"""
from __future__ import annotations

import ipaddress
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_COMFYUI_URL = "http://localhost:8188"
DEFAULT_PROMPTS_DIR = "./prompts"
DEFAULT_STATIC_DRIVE_PATH = "./static"
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8189
DEFAULT_FILENAME_PREFIX = "Derivata"
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_MAX_JSON_BYTES = 10 * 1024 * 1024


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0], raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, using default=%s", names[0], value, default)
        return default
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, using default=%s", names[0], value, default)
        return default
    return value


def _env_float(default: float, *names: str, min_value: float | None = None, max_value: float | None = None) -> float:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid float for %s=%r, using default=%s", names[0], raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0], value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0], value, max_value)
        value = max_value
    return value


def _resolve_api_host() -> str:
    raw = _env_raw("CAP_API_HOST", "API_HOST", default=DEFAULT_API_HOST) or DEFAULT_API_HOST
    try:
        ipaddress.ip_address(raw)
    except ValueError:
        logger.warning("Invalid API_HOST '%s', falling back to %s", raw, DEFAULT_API_HOST)
        return DEFAULT_API_HOST
    return raw


@dataclass(frozen=True)
class ProxyConfig:
    comfyui_url: str = DEFAULT_COMFYUI_URL
    prompts_dir: str = DEFAULT_PROMPTS_DIR
    static_drive_path: str = DEFAULT_STATIC_DRIVE_PATH
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    default_filename_prefix: str = DEFAULT_FILENAME_PREFIX
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    max_json_bytes: int = DEFAULT_MAX_JSON_BYTES

    def describe(self) -> dict[str, str]:
        """Printable view of the effective settings (startup banner)."""
        return {
            "COMFYUI_URL": self.comfyui_url,
            "PROMPTS_DIR": self.prompts_dir,
            "STATIC_DRIVE_PATH": self.static_drive_path,
            "API_HOST": self.api_host,
            "API_PORT": str(self.api_port),
        }


def load_config() -> ProxyConfig:
    comfyui_url = _env_raw("CAP_COMFYUI_URL", "COMFYUI_URL", default=DEFAULT_COMFYUI_URL) or DEFAULT_COMFYUI_URL
    return ProxyConfig(
        comfyui_url=comfyui_url.rstrip("/"),
        prompts_dir=_env_raw("CAP_PROMPTS_DIR", "PROMPTS_DIR", default=DEFAULT_PROMPTS_DIR) or DEFAULT_PROMPTS_DIR,
        static_drive_path=_env_raw("CAP_STATIC_DRIVE_PATH", "STATIC_DRIVE_PATH", default=DEFAULT_STATIC_DRIVE_PATH)
        or DEFAULT_STATIC_DRIVE_PATH,
        api_host=_resolve_api_host(),
        api_port=_env_int(DEFAULT_API_PORT, "CAP_API_PORT", "API_PORT", min_value=1, max_value=65535),
        default_filename_prefix=_env_raw("CAP_DEFAULT_FILENAME_PREFIX", default=DEFAULT_FILENAME_PREFIX)
        or DEFAULT_FILENAME_PREFIX,
        http_timeout=_env_float(DEFAULT_HTTP_TIMEOUT, "CAP_HTTP_TIMEOUT", min_value=1.0, max_value=600.0),
        max_json_bytes=_env_int(DEFAULT_MAX_JSON_BYTES, "CAP_MAX_JSON_SIZE", min_value=1024),
    )
