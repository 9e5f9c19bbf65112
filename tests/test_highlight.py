import pytest

from mindmap.graph.model import ConceptGraph
from mindmap.highlight import HighlightPropagator, highlight_map
from mindmap.models import HighlightTag


def test_star_center_tags_every_leaf_degree_one(star_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(star_graph)
    hp.select("n")

    assert hp.node_tags["n"] == HighlightTag.SELECTED
    assert hp.tagged_nodes(HighlightTag.DEGREE_1) == ["a", "b", "c"]
    assert hp.tagged_edges(HighlightTag.DEGREE_1) == [0, 1, 2]


def test_star_leaf_reaches_siblings_at_degree_two(star_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(star_graph)
    hp.select("a")

    assert hp.node_tags["n"] == HighlightTag.DEGREE_1
    assert hp.tagged_nodes(HighlightTag.DEGREE_2) == ["b", "c"]
    assert hp.edge_tags == {0: HighlightTag.DEGREE_1, 1: HighlightTag.DEGREE_2, 2: HighlightTag.DEGREE_2}


def test_path_stops_after_three_hops(path_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(path_graph)
    hp.select("a")

    assert hp.node_tags == {
        "a": HighlightTag.SELECTED,
        "b": HighlightTag.DEGREE_1,
        "c": HighlightTag.DEGREE_2,
        "d": HighlightTag.DEGREE_3,
        "e": HighlightTag.NONE,
    }
    assert [hp.edge_tags[i] for i in range(4)] == [
        HighlightTag.DEGREE_1,
        HighlightTag.DEGREE_2,
        HighlightTag.DEGREE_3,
        HighlightTag.NONE,
    ]


def test_max_depth_limits_propagation(path_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(path_graph, max_depth=1)
    hp.select("c")

    assert hp.tagged_nodes(HighlightTag.DEGREE_1) == ["b", "d"]
    assert hp.tagged_nodes(HighlightTag.DEGREE_2) == []
    assert hp.node_tags["a"] == HighlightTag.NONE


def test_first_reach_wins_in_a_triangle() -> None:
    graph = ConceptGraph()
    graph.add_edge("s", "x", 1)
    graph.add_edge("s", "y", 1)
    graph.add_edge("x", "y", 1)

    hp = HighlightPropagator(graph)
    hp.select("s")

    assert hp.node_tags["x"] == HighlightTag.DEGREE_1
    assert hp.node_tags["y"] == HighlightTag.DEGREE_1
    assert hp.edge_tags[0] == HighlightTag.DEGREE_1
    assert hp.edge_tags[2] == HighlightTag.DEGREE_2


def test_tags_partition_the_nodes(sample_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(sample_graph)
    hp.select("childhood")

    seen: list[str] = []
    for tag in HighlightTag:
        seen.extend(hp.tagged_nodes(tag))
    assert sorted(seen) == sorted(sample_graph.nodes)
    assert hp.tagged_nodes(HighlightTag.SELECTED) == ["childhood"]


def test_parallel_edges_are_both_tagged() -> None:
    graph = ConceptGraph()
    graph.add_edge("a", "b", 1)
    graph.add_edge("b", "a", 2)

    hp = HighlightPropagator(graph)
    hp.select("a")
    assert hp.tagged_edges(HighlightTag.DEGREE_1) == [0, 1]


def test_background_tap_clears_everything(star_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(star_graph)
    hp.select("n")
    hp.select(None)

    assert hp.is_idle
    assert set(hp.node_tags.values()) == {HighlightTag.NONE}
    assert set(hp.edge_tags.values()) == {HighlightTag.NONE}


def test_reselect_retags_from_scratch(path_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(path_graph)
    hp.select("a")
    hp.select("e")

    assert hp.node_tags["a"] == HighlightTag.NONE
    assert hp.node_tags["b"] == HighlightTag.DEGREE_3
    assert hp.node_tags["e"] == HighlightTag.SELECTED


def test_unknown_node_leaves_idle(star_graph: ConceptGraph, caplog) -> None:
    hp = HighlightPropagator(star_graph)
    hp.select("n")
    hp.select("ghost")

    assert hp.is_idle
    assert hp.tagged_nodes(HighlightTag.DEGREE_1) == []
    assert "unknown node 'ghost'" in caplog.text


def test_isolated_selection_tags_only_itself() -> None:
    graph = ConceptGraph()
    graph.add_node("alone")
    graph.add_edge("x", "y", 1)

    hp = HighlightPropagator(graph)
    hp.select("alone")
    assert hp.snapshot() == {"selected": "alone", "nodes": {"alone": "selected"}, "edges": {}}


def test_snapshot_uses_edge_ids(star_graph: ConceptGraph) -> None:
    hp = HighlightPropagator(star_graph)
    hp.select("b")
    snap = hp.snapshot()

    assert snap["selected"] == "b"
    assert snap["edges"] == {
        "edge-n-a-0": "degree-2",
        "edge-n-b-1": "degree-1",
        "edge-n-c-2": "degree-2",
    }


def test_highlight_map_covers_every_node(star_graph: ConceptGraph) -> None:
    mapping = highlight_map(star_graph)

    assert set(mapping) == {"n", "a", "b", "c"}
    assert mapping["a"]["nodes"]["n"] == "degree-1"
    assert mapping["n"]["nodes"]["n"] == "selected"


@pytest.mark.parametrize("depth", [0, 4])
def test_max_depth_outside_one_to_three_is_rejected(star_graph: ConceptGraph, depth: int) -> None:
    with pytest.raises(ValueError, match="max_depth"):
        HighlightPropagator(star_graph, max_depth=depth)
