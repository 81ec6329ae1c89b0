"""Turn a raw `--set` / `--param` value string into a JSON value."""

from __future__ import annotations

import json
import math
import re
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {raw}")
    return value


def _int64_or_float(raw: str) -> int | float:
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        return _finite_float(raw)
    return value


def _parse_json(raw: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(
            raw,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
            parse_int=_int64_or_float,
        )
    except ValueError:
        return False, None


def _parse_int64(raw: str) -> int | None:
    if not _INT_RE.match(raw):
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def _parse_float(raw: str) -> float | None:
    if not _FLOAT_RE.match(raw):
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def coerce_value(raw: str) -> Any:
    """
    First match wins:

    1. a complete JSON document (`"123"` stays a string, `[1,2]` a list)
    2. `null` / `true` / `false` in any case
    3. a 64-bit signed integer (`+5`, `007`)
    4. a finite float (`1.`, `.5`)
    5. the string itself (`sdxl`)
    """
    ok, parsed = _parse_json(raw)
    if ok:
        return parsed
    lowered = raw.lower()
    if lowered == "null":
        return None
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    as_int = _parse_int64(raw)
    if as_int is not None:
        return as_int
    as_float = _parse_float(raw)
    if as_float is not None:
        return as_float
    return raw
