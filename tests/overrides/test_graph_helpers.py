from cap_backend.features.overrides import graph as g


def test_is_link_shapes() -> None:
    assert g._is_link(["6", 0])
    assert g._is_link([6, 1])
    assert g._is_link(("6", 0))
    assert not g._is_link(["6", 0, 1])
    assert not g._is_link(["6", "0"])
    assert not g._is_link(["", 0])
    assert not g._is_link([True, 0])
    assert not g._is_link(["6", False])
    assert not g._is_link("6")


def test_resolve_link_stringifies_integer_ids() -> None:
    assert g._resolve_link([6, 0]) == ("6", 0)
    assert g._resolve_link(["12", 2]) == ("12", 2)
    assert g._resolve_link(None) is None


def test_walk_passthrough_skips_reroutes() -> None:
    graph = {
        "20": {"class_type": "Reroute", "inputs": {"": ["21", 0]}},
        "21": {"class_type": "Reroute", "inputs": {"input": [6, 0]}},
        "6": {"class_type": "CLIPTextEncode", "inputs": {}},
    }

    def is_reroute(node):
        return node.get("class_type") == "Reroute"

    assert g.walk_passthrough(graph, ["20", 0], is_reroute) == "6"
    assert g.walk_passthrough(graph, ["6", 0], is_reroute) == "6"
    assert g.walk_passthrough(graph, ["missing", 0], is_reroute) == "missing"
    assert g.walk_passthrough(graph, "nope", is_reroute) is None


def test_walk_passthrough_stops_on_cycles() -> None:
    graph = {
        "1": {"class_type": "Reroute", "inputs": {"": ["2", 0]}},
        "2": {"class_type": "Reroute", "inputs": {"": ["1", 0]}},
    }
    result = g.walk_passthrough(graph, ["1", 0], lambda n: True, max_hops=5)
    assert result in {"1", "2"}


def test_node_id_sort_key_is_numeric_aware() -> None:
    ids = ["10", "2", "abc", "1:3", "1:10", "7"]
    assert sorted(ids, key=g.node_id_sort_key) == ["1:3", "1:10", "2", "7", "10", "abc"]


def test_is_probably_graph() -> None:
    assert g.is_probably_graph({"3": {"class_type": "KSampler", "inputs": {}}})
    assert not g.is_probably_graph({"prompt": {"3": {"class_type": "KSampler"}}})
    assert not g.is_probably_graph({"3": {"class_type": 5}})
    assert not g.is_probably_graph([])
