"""Walk ComfyUI `/history` payloads for prompt ids and output filenames."""

from __future__ import annotations

from typing import Any

MIN_PROMPT_ID_LENGTH = 8


def collect_prompt_ids(history: Any, out: list[str] | None = None) -> list[str]:
    out = [] if out is None else out
    if isinstance(history, dict):
        for key, value in history.items():
            if len(key) >= MIN_PROMPT_ID_LENGTH and isinstance(value, dict):
                out.append(key)
            if key == "history":
                collect_prompt_ids(value, out)
    elif isinstance(history, list):
        for value in history:
            collect_prompt_ids(value, out)
    return out


def _collect_any_filenames(value: Any, out: list[str]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if key == "filename" and isinstance(item, str):
                out.append(item)
            _collect_any_filenames(item, out)
    elif isinstance(value, list):
        for item in value:
            _collect_any_filenames(item, out)


def collect_filenames_for_id(history: Any, prompt_id: str, out: list[str] | None = None) -> list[str]:
    """Every `filename` string found under `history[prompt_id]`, at any depth."""
    out = [] if out is None else out
    if isinstance(history, dict):
        entry = history.get(prompt_id)
        if entry is not None:
            _collect_any_filenames(entry, out)
        for key, value in history.items():
            if key != prompt_id:
                collect_filenames_for_id(value, prompt_id, out)
    elif isinstance(history, list):
        for value in history:
            collect_filenames_for_id(value, prompt_id, out)
    return out
