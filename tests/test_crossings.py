from mindmap.graph.model import ConceptGraph
from mindmap.layout.crossings import crossing_penalties


def _chain(*names: str) -> ConceptGraph:
    graph = ConceptGraph()
    for src, dst in zip(names, names[1:]):
        graph.add_edge(src, dst, 1)
    return graph


def test_leaves_sharing_a_hub_attract(star_graph: ConceptGraph) -> None:
    penalties = crossing_penalties(star_graph)

    assert penalties["a"]["b"] == -2
    assert penalties["n"]["a"] == 0


def test_chain_penalties() -> None:
    penalties = crossing_penalties(_chain("a", "b", "c", "d"))

    # a and c share b; c also reaches d
    assert penalties["a"]["c"] == -1
    # disjoint other neighbors would cross
    assert penalties["a"]["d"] == 1
    # direct neighbors ignore the edge between them
    assert penalties["b"]["c"] == 1


def test_parallel_edges_count_per_edge() -> None:
    graph = ConceptGraph()
    graph.add_edge("a", "x", 1)
    graph.add_edge("a", "x", 1)
    graph.add_edge("b", "y", 1)

    penalties = crossing_penalties(graph)
    assert penalties["a"]["b"] == 2


def test_penalties_are_symmetric_and_cover_all_pairs(sample_graph: ConceptGraph) -> None:
    penalties = crossing_penalties(sample_graph)
    nodes = list(sample_graph.nodes)

    for a in nodes:
        assert a not in penalties[a]
        for b in nodes:
            if a != b:
                assert penalties[a][b] == penalties[b][a]


def test_isolated_nodes_get_zero() -> None:
    graph = ConceptGraph()
    graph.add_node("p")
    graph.add_node("q")
    assert crossing_penalties(graph) == {"p": {"q": 0}, "q": {"p": 0}}
