import pytest

from mindmap.graph.model import ConceptGraph
from mindmap.layout.importance import normalize_scores, score_nodes
from mindmap.models import ImportanceScore


class _Centrality:
    def __init__(self, values: dict[str, float]):
        self.values = values

    def betweenness(self) -> dict[str, float]:
        return self.values


class _BrokenCentrality:
    def betweenness(self) -> dict[str, float]:
        raise RuntimeError("centrality not supported")


def test_degree_and_weight_metrics() -> None:
    graph = ConceptGraph()
    graph.add_edge("a", "b", 10)
    graph.add_edge("a", "c", 20)
    graph.add_edge("a", "b", 30)

    scores = score_nodes(graph)
    a = scores["a"]
    assert a.degree == 3
    assert a.total_weight == 60
    assert a.avg_weight == pytest.approx(20.0)
    assert a.composite_score == pytest.approx(60.0)
    assert a.betweenness == 0.0

    assert scores["c"].degree == 1
    assert scores["c"].composite_score == pytest.approx(20.0)


def test_zero_weight_edges_count_as_weight_one() -> None:
    graph = ConceptGraph()
    graph.add_edge("a", "b", 0)
    graph.add_edge("a", "c", 0)

    scores = score_nodes(graph)
    assert scores["a"].avg_weight == 0
    assert scores["a"].composite_score == pytest.approx(2.0)


def test_isolated_nodes_score_zero_and_normalize_to_half() -> None:
    graph = ConceptGraph()
    for name in ("x", "y", "z"):
        graph.add_node(name)

    scores = score_nodes(graph)
    for score in scores.values():
        assert score.degree == 0
        assert score.composite_score == 0
        assert score.normalized == 0.5


def test_betweenness_adds_five_times_centrality(path_graph: ConceptGraph) -> None:
    engine = _Centrality({"c": 0.5, "b": 0.25})
    scores = score_nodes(path_graph, engine)

    assert scores["c"].betweenness == 0.5
    assert scores["c"].composite_score == pytest.approx(2 * 5 + 0.5 * 5)
    assert scores["b"].composite_score == pytest.approx(2 * 5 + 0.25 * 5)
    assert scores["a"].betweenness == 0.0


def test_failing_centrality_degrades_to_zero(path_graph: ConceptGraph, caplog) -> None:
    scores = score_nodes(path_graph, _BrokenCentrality())

    assert all(s.betweenness == 0.0 for s in scores.values())
    assert scores["c"].composite_score == pytest.approx(10.0)
    assert "Betweenness centrality unavailable" in caplog.text


def test_engine_without_capability_is_fine(path_graph: ConceptGraph) -> None:
    scores = score_nodes(path_graph, object())
    assert all(s.betweenness == 0.0 for s in scores.values())


def test_normalization_hits_both_ends() -> None:
    scores = {
        "low": ImportanceScore(composite_score=2.0),
        "mid": ImportanceScore(composite_score=5.0),
        "high": ImportanceScore(composite_score=8.0),
    }
    normalized = normalize_scores(scores)

    assert normalized == {"low": 0.0, "mid": 0.5, "high": 1.0}
    assert scores["high"].normalized == 1.0


def test_normalization_single_node_and_empty() -> None:
    scores = {"only": ImportanceScore(composite_score=42.0)}
    assert normalize_scores(scores) == {"only": 0.5}
    assert normalize_scores({}) == {}


def test_normalized_values_stay_in_unit_interval(sample_graph: ConceptGraph) -> None:
    scores = score_nodes(sample_graph)
    values = [s.normalized for s in scores.values()]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert min(values) == 0.0
    assert max(values) == 1.0
