"""
Core utilities for route handlers.
"""
from .request_json import _read_json
from .response import _json_response, _text_lines_response
from .services import APP_KEY_CLIENT, APP_KEY_CONFIG, APP_KEY_NODE_KINDS, APP_KEY_STORE, install_services

__all__ = [
    "_json_response",
    "_text_lines_response",
    "_read_json",
    "APP_KEY_CLIENT",
    "APP_KEY_CONFIG",
    "APP_KEY_NODE_KINDS",
    "APP_KEY_STORE",
    "install_services",
]
