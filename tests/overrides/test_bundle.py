from cap_backend.features.overrides.bundle import OverrideBundle


def test_from_payload_merges_params_and_top_level_keys() -> None:
    res = OverrideBundle.from_payload(
        {
            "params": {"seed": 1, "steps": 10, "custom": "kept"},
            "seed": 2,
            "text_positive": "a cat",
            "not_known": 5,
        }
    )
    assert res.ok
    assert res.data.params == {"seed": 2, "steps": 10, "custom": "kept", "text_positive": "a cat"}


def test_from_payload_parses_sets_and_skips_non_strings() -> None:
    res = OverrideBundle.from_payload({"sets": ["3.inputs.seed=42", 7, None]})
    assert res.ok
    assert res.data.path_sets == [(["3", "inputs", "seed"], 42)]


def test_from_payload_malformed_set_fails() -> None:
    res = OverrideBundle.from_payload({"sets": ["seed=42", "badnosep"]})
    assert not res.ok
    assert res.code == "MALFORMED_OVERRIDE"
    assert res.meta["item"] == "badnosep"


def test_from_payload_prefix_and_verbose() -> None:
    default = OverrideBundle.from_payload({}).unwrap()
    assert default.filename_prefix == "Derivata"
    assert default.verbose is False
    custom = OverrideBundle.from_payload({"filename_prefix": "Run42", "verbose": "yes"}, default_prefix="Other").unwrap()
    assert custom.filename_prefix == "Run42"
    assert custom.verbose is True
    assert OverrideBundle.from_payload({"filename_prefix": 3}, default_prefix="Other").unwrap().filename_prefix == "Other"


def test_from_cli_coerces_by_hint() -> None:
    res = OverrideBundle.from_cli(
        sets=["3.inputs.cfg=7.5"],
        params=["seed=42", "ckpt_name=123", "text_positive=a cat"],
    )
    assert res.ok
    assert res.data.params == {"seed": 42, "ckpt_name": "123", "text_positive": "a cat"}
    assert res.data.path_sets == [(["3", "inputs", "cfg"], 7.5)]


def test_from_cli_rejects_unknown_and_malformed_params() -> None:
    unknown = OverrideBundle.from_cli(params=["guidance=3"])
    assert not unknown.ok
    assert unknown.code == "INVALID_INPUT"
    malformed = OverrideBundle.from_cli(params=["seed"])
    assert malformed.code == "MALFORMED_OVERRIDE"
    bad_set = OverrideBundle.from_cli(sets=["oops"])
    assert bad_set.meta["item"] == "oops"
