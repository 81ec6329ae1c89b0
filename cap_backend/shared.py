"""Backend-facing alias for shared utilities."""

from __future__ import annotations

from cap_shared import (
    ErrorCode,
    Result,
    get_logger,
    log_structured,
    log_success,
    request_id_var,
    sanitize_error_message,
)

__all__ = [
    "Result",
    "ErrorCode",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
]
