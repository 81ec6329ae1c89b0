"""
Shared enums and constants.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_JSON = "INVALID_JSON"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED_OVERRIDE = "MALFORMED_OVERRIDE"

    # Workflow templates
    WORKFLOW_NOT_FOUND = "WORKFLOW_NOT_FOUND"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    WRITE_FAILED = "WRITE_FAILED"

    # Upstream ComfyUI
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    TIMEOUT = "TIMEOUT"
