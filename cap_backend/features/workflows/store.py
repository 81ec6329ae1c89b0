"""
Named workflow templates stored as `<prompts_dir>/<name>.json`.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from ...shared import ErrorCode, Result, get_logger, sanitize_error_message

logger = get_logger(__name__)

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")
WORKFLOW_SUFFIX = ".json"


def is_safe_workflow_name(name: Any) -> bool:
    if not isinstance(name, str):
        return False
    normalized = name.strip()
    if not normalized or ".." in normalized:
        return False
    return bool(_SAFE_NAME_RE.match(normalized))


class WorkflowStore:
    def __init__(self, prompts_dir: str | Path) -> None:
        self.root = Path(prompts_dir)

    def _path_for(self, name: str) -> Path:
        return self.root / f"{name.strip()}{WORKFLOW_SUFFIX}"

    def _find_case_insensitive(self, name: str) -> Path | None:
        target = f"{name.strip()}{WORKFLOW_SUFFIX}".lower()
        try:
            for entry in self.root.iterdir():
                if entry.is_file() and entry.name.lower() == target:
                    return entry
        except OSError:
            return None
        return None

    def list_names(self) -> list[str]:
        try:
            return sorted(p.stem for p in self.root.glob(f"*{WORKFLOW_SUFFIX}") if p.is_file())
        except OSError:
            return []

    def load(self, name: str) -> Result[Any]:
        """Read and parse a workflow; every call returns a fresh object."""
        if not is_safe_workflow_name(name):
            return Result.Err(ErrorCode.INVALID_INPUT, "Invalid workflow name", name=str(name))
        path = self._path_for(name)
        if not path.is_file():
            path = self._find_case_insensitive(name) or path
        if not path.is_file():
            return Result.Err(ErrorCode.WORKFLOW_NOT_FOUND, f"Workflow not found: {name}", name=name)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to read workflow %s: %s", name, exc)
            return Result.Err(
                ErrorCode.WORKFLOW_NOT_FOUND,
                sanitize_error_message(exc, "Failed to read workflow file"),
                name=name,
            )
        try:
            return Result.Ok(json.loads(text), name=name)
        except ValueError as exc:
            return Result.Err(
                ErrorCode.PARSE_ERROR,
                sanitize_error_message(exc, "Failed to parse workflow JSON"),
                name=name,
            )

    def save(self, name: str, workflow: Any) -> Result[str]:
        if not is_safe_workflow_name(name):
            return Result.Err(ErrorCode.INVALID_INPUT, "Invalid workflow name", name=str(name))
        if not isinstance(workflow, dict):
            return Result.Err(ErrorCode.INVALID_INPUT, "Workflow must be a JSON object", name=name)
        path = self._path_for(name)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(workflow, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write workflow %s: %s", name, exc)
            return Result.Err(ErrorCode.WRITE_FAILED, sanitize_error_message(exc, "Failed to save workflow"))
        logger.info("Saved workflow %s", name)
        return Result.Ok(name.strip())
