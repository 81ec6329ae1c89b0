import copy
import json

from cap_backend.features.overrides.applier import apply_overrides, apply_path_sets, build_prompt_body
from cap_backend.features.overrides.bundle import OverrideBundle
from cap_backend.features.workflows.store import WorkflowStore


def test_pipeline_order_sets_beat_params(sdxl_graph) -> None:
    root = {"prompt": sdxl_graph}
    bundle = OverrideBundle.from_payload({"seed": 1, "sets": ["3.inputs.seed=2"]}).unwrap()
    res = apply_overrides(root, bundle)
    assert res.ok
    assert root["prompt"]["3"]["inputs"]["seed"] == 2
    assert root["prompt"]["9"]["inputs"]["filename_prefix"] == "Derivata"
    assert res.meta["filename_prefix_filled"] == ["9"]


def test_set_on_filename_prefix_is_not_overwritten_by_default(sdxl_graph) -> None:
    root = {"prompt": sdxl_graph}
    bundle = OverrideBundle.from_payload({"sets": ["9.inputs.filename_prefix=mine"]}).unwrap()
    apply_overrides(root, bundle)
    assert root["prompt"]["9"]["inputs"]["filename_prefix"] == "mine"


def test_unknown_first_segment_targets_envelope(sdxl_graph) -> None:
    root = {"prompt": sdxl_graph}
    failed = apply_path_sets(root, [(["client_id"], "abc"), (["extra_data", "note"], "x")])
    assert failed == []
    assert root["client_id"] == "abc"
    assert root["extra_data"] == {"note": "x"}
    assert "client_id" not in root["prompt"]


def test_graph_node_path_failure_is_a_warning(sdxl_graph) -> None:
    root = {"prompt": sdxl_graph}
    bundle = OverrideBundle.from_payload({"sets": ["3.inputs.seed.x=1"]}).unwrap()
    res = apply_overrides(root, bundle)
    assert res.ok
    assert res.meta["warnings"] == ["Could not apply override to path 3.inputs.seed.x"]
    assert root["prompt"]["3"]["inputs"]["seed"] == 156680208700286
    assert "3" not in root


def test_unapplicable_path_becomes_warning() -> None:
    root = {"prompt": {"3": {"class_type": "KSampler", "inputs": {}}}, "number": 5}
    bundle = OverrideBundle.from_payload({"sets": ["number.x=1"]}).unwrap()
    res = apply_overrides(root, bundle)
    assert res.ok
    assert res.meta["warnings"] == ["Could not apply override to path number.x"]
    assert root["number"] == 5


def test_missing_prompt_is_an_error() -> None:
    res = apply_overrides({"workflow": "x"}, OverrideBundle())
    assert not res.ok
    assert res.code == "INVALID_INPUT"
    assert not apply_overrides([], OverrideBundle()).ok


def test_text_targets_reported(sdxl_graph) -> None:
    root = {"prompt": sdxl_graph}
    res = apply_overrides(root, OverrideBundle(params={"text_positive": "a cat"}))
    assert res.meta["text_targets"]["positive"] == "6"
    assert root["prompt"]["6"]["inputs"]["text"] == "a cat"
    assert root["prompt"]["7"]["inputs"]["text"] == "text, watermark"


def test_build_prompt_body_rejects_before_mutation(sdxl_graph) -> None:
    payload = {"prompt": sdxl_graph, "seed": 1, "sets": ["seed=42", "badnosep"]}
    before = copy.deepcopy(payload)
    res = build_prompt_body(payload, None, "Derivata")
    assert not res.ok
    assert res.code == "MALFORMED_OVERRIDE"
    assert "badnosep" in (res.error or "")
    assert payload == before


def test_build_prompt_body_from_inline_prompt_copies(sdxl_graph) -> None:
    payload = {"prompt": sdxl_graph, "steps": 30}
    res = build_prompt_body(payload, None, "Derivata")
    assert res.ok
    assert res.data["prompt"]["3"]["inputs"]["steps"] == 30
    assert sdxl_graph["3"]["inputs"]["steps"] == 20


def test_build_prompt_body_from_named_workflow(tmp_path, sdxl_graph) -> None:
    (tmp_path / "sdxl.json").write_text(json.dumps(sdxl_graph), encoding="utf-8")
    store = WorkflowStore(tmp_path)
    res = build_prompt_body({"workflow": "sdxl", "filename_prefix": "Run"}, store, "Derivata")
    assert res.ok
    assert res.data["prompt"]["9"]["inputs"]["filename_prefix"] == "Run"


def test_build_prompt_body_requires_source() -> None:
    res = build_prompt_body({"seed": 1}, None, "Derivata")
    assert not res.ok
    assert res.error == "Either 'prompt' or 'workflow' must be provided"


def test_verbose_logs_body(sdxl_graph, caplog) -> None:
    from cap_backend.features.overrides import applier

    applier.logger.propagate = True
    try:
        with caplog.at_level("INFO", logger=applier.logger.name):
            apply_overrides({"prompt": sdxl_graph}, OverrideBundle(verbose=True))
    finally:
        applier.logger.propagate = False
    assert any("Constructed request body" in r.getMessage() for r in caplog.records)
