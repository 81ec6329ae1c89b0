import json

import pytest

from cap_backend.features.workflows.store import WorkflowStore, is_safe_workflow_name


@pytest.mark.parametrize("name", ["sdxl", "flux-dev_v1.2", "A1"])
def test_safe_names(name) -> None:
    assert is_safe_workflow_name(name)


@pytest.mark.parametrize("name", ["", "../etc/passwd", "a/b", "a\\b", ".hidden", "x..y", None, 5])
def test_unsafe_names(name) -> None:
    assert not is_safe_workflow_name(name)


def test_save_then_load_round_trip(tmp_path) -> None:
    store = WorkflowStore(tmp_path / "prompts")
    graph = {"3": {"class_type": "KSampler", "inputs": {"seed": 1}}}
    saved = store.save("sdxl", graph)
    assert saved.ok and saved.data == "sdxl"
    loaded = store.load("sdxl")
    assert loaded.ok
    assert loaded.data == graph
    assert store.list_names() == ["sdxl"]


def test_load_returns_fresh_objects(tmp_path) -> None:
    store = WorkflowStore(tmp_path)
    store.save("a", {"1": {"inputs": {}}})
    first = store.load("a").unwrap()
    first["1"]["inputs"]["x"] = 1
    assert store.load("a").unwrap() == {"1": {"inputs": {}}}


def test_load_case_insensitive_fallback(tmp_path) -> None:
    (tmp_path / "SDXL.json").write_text(json.dumps({"1": {}}), encoding="utf-8")
    res = WorkflowStore(tmp_path).load("sdxl")
    assert res.ok
    assert res.data == {"1": {}}


def test_load_errors(tmp_path) -> None:
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    store = WorkflowStore(tmp_path)
    assert store.load("missing").code == "WORKFLOW_NOT_FOUND"
    assert store.load("broken").code == "PARSE_ERROR"
    assert store.load("../x").code == "INVALID_INPUT"


def test_save_validation(tmp_path) -> None:
    store = WorkflowStore(tmp_path)
    assert store.save("../evil", {}).code == "INVALID_INPUT"
    assert store.save("ok", ["not", "an", "object"]).code == "INVALID_INPUT"


def test_list_names_missing_dir(tmp_path) -> None:
    assert WorkflowStore(tmp_path / "nope").list_names() == []
