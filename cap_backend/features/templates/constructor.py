"""
`{{placeholder}}` substitution over a JSON template.

A string value that is exactly `{{ key }}` is replaced by `inputs[key]`
(any JSON type, not string interpolation). Partial matches are left alone.
"""

from __future__ import annotations

import copy
from typing import Any

from ...shared import ErrorCode, Result


class MissingPlaceholder(KeyError):
    pass


def _placeholder_key(value: str) -> str | None:
    if value.startswith("{{") and value.endswith("}}") and len(value) >= 4:
        return value[2:-2].strip()
    return None


def _replace(value: Any, inputs: dict[str, Any]) -> Any:
    if isinstance(value, dict):
        for key, item in value.items():
            value[key] = _replace(item, inputs)
        return value
    if isinstance(value, list):
        for idx, item in enumerate(value):
            value[idx] = _replace(item, inputs)
        return value
    if isinstance(value, str):
        key = _placeholder_key(value)
        if key is None:
            return value
        if key not in inputs:
            raise MissingPlaceholder(key)
        return copy.deepcopy(inputs[key])
    return value


def construct_prompt(template: Any, inputs: Any) -> Result[Any]:
    if template is None:
        return Result.Err(ErrorCode.INVALID_INPUT, "Template is required")
    if not isinstance(inputs, dict):
        return Result.Err(ErrorCode.INVALID_INPUT, "Inputs must be an object")
    try:
        return Result.Ok(_replace(copy.deepcopy(template), inputs))
    except MissingPlaceholder as exc:
        key = exc.args[0]
        return Result.Err(ErrorCode.TEMPLATE_ERROR, f"Missing input for placeholder: {key}", placeholder=key)
