from cap_backend.features.history import collect_filenames_for_id, collect_prompt_ids

HISTORY = {
    "4f0e8c1a-aaaa-bbbb": {
        "prompt": [1, "4f0e8c1a-aaaa-bbbb", {}],
        "outputs": {
            "9": {"images": [{"filename": "Derivata_00001_.png", "subfolder": "", "type": "output"}]},
            "12": {"images": [{"filename": "Derivata_00002_.png"}]},
        },
    },
    "9d9d9d9d-cccc": {"outputs": {"9": {"images": [{"filename": "other.png"}]}}},
    "short": {"outputs": {}},
}


def test_collect_prompt_ids_uses_long_object_keys() -> None:
    assert collect_prompt_ids(HISTORY) == ["4f0e8c1a-aaaa-bbbb", "9d9d9d9d-cccc"]


def test_collect_prompt_ids_nested_history() -> None:
    assert collect_prompt_ids({"history": HISTORY}) == ["4f0e8c1a-aaaa-bbbb", "9d9d9d9d-cccc"]
    assert collect_prompt_ids("nope") == []


def test_collect_filenames_for_id() -> None:
    files = collect_filenames_for_id(HISTORY, "4f0e8c1a-aaaa-bbbb")
    assert files == ["Derivata_00001_.png", "Derivata_00002_.png"]
    assert collect_filenames_for_id({"history": HISTORY}, "9d9d9d9d-cccc") == ["other.png"]
    assert collect_filenames_for_id(HISTORY, "unknown-prompt") == []
