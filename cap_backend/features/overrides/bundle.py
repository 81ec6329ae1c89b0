"""
Override bundle: everything one request or CLI invocation wants changed.

Building a bundle parses every `sets` item up front, so a malformed item is
reported before the graph is touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from ...config import DEFAULT_FILENAME_PREFIX
from ...shared import ErrorCode, Result
from ...utils import parse_bool
from .param_router import DEFAULT_PARAM_TABLE, ParamTable
from .path_setter import SetPair, parse_set_pairs


@dataclass
class OverrideBundle:
    params: dict[str, Any] = field(default_factory=dict)
    path_sets: list[SetPair] = field(default_factory=list)
    filename_prefix: str = DEFAULT_FILENAME_PREFIX
    verbose: bool = False

    @classmethod
    def from_payload(
        cls,
        payload: dict[str, Any],
        default_prefix: str = DEFAULT_FILENAME_PREFIX,
        table: ParamTable = DEFAULT_PARAM_TABLE,
    ) -> Result["OverrideBundle"]:
        """
        Build from a `/queue_prompt` body.

        Known keys may sit under `params` or at the top level; the top level
        wins. Non-string `sets` items are ignored.
        """
        params: dict[str, Any] = {}
        raw_params = payload.get("params")
        if isinstance(raw_params, dict):
            params.update(raw_params)
        for name in table.names():
            if name in payload:
                params[name] = payload[name]

        raw_sets = payload.get("sets")
        items = [s for s in raw_sets if isinstance(s, str)] if isinstance(raw_sets, list) else []
        parsed = parse_set_pairs(items)
        if not parsed.ok:
            return Result.Err(parsed.code, parsed.error or "Invalid sets", **parsed.meta)

        prefix = payload.get("filename_prefix")
        return Result.Ok(
            cls(
                params=params,
                path_sets=parsed.data or [],
                filename_prefix=prefix if isinstance(prefix, str) else default_prefix,
                verbose=parse_bool(payload.get("verbose"), False),
            )
        )

    @classmethod
    def from_cli(
        cls,
        sets: Iterable[str] = (),
        params: Iterable[str] = (),
        filename_prefix: str | None = None,
        default_prefix: str = DEFAULT_FILENAME_PREFIX,
        verbose: bool = False,
        table: ParamTable = DEFAULT_PARAM_TABLE,
    ) -> Result["OverrideBundle"]:
        """Build from `--set a.b=v` and `--param key=v` strings."""
        parsed_params: dict[str, Any] = {}
        for item in params:
            key, sep, raw = item.partition("=")
            if not sep:
                return Result.Err(
                    ErrorCode.MALFORMED_OVERRIDE,
                    f"Invalid --param '{item}', expected KEY=VALUE",
                    item=item,
                )
            known = table.get(key)
            if known is None:
                return Result.Err(
                    ErrorCode.INVALID_INPUT,
                    f"Unknown parameter '{key}'",
                    item=item,
                    known=table.names(),
                )
            parsed_params[key] = known.coerce(raw)

        parsed_sets = parse_set_pairs(list(sets))
        if not parsed_sets.ok:
            return Result.Err(parsed_sets.code, parsed_sets.error or "Invalid sets", **parsed_sets.meta)

        return Result.Ok(
            cls(
                params=parsed_params,
                path_sets=parsed_sets.data or [],
                filename_prefix=filename_prefix if filename_prefix is not None else default_prefix,
                verbose=verbose,
            )
        )
