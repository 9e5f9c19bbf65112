import json
from pathlib import Path

import pytest

from mindmap.graph.model import ConceptGraph
from mindmap.graph.store import GraphFileError, load_graph, loads_graph, save_graph


def test_save_then_load_round_trips(tmp_path: Path, sample_graph: ConceptGraph) -> None:
    sample_graph.add_edge("childhood", "toxic shame", 20)  # parallel edge survives
    path = save_graph(sample_graph, tmp_path / "mind-map.json")

    loaded = load_graph(path)
    assert list(loaded.nodes) == list(sample_graph.nodes)
    assert loaded.edges == sample_graph.edges


def test_saved_file_uses_from_to_weight_records(tmp_path: Path) -> None:
    graph = ConceptGraph()
    graph.add_edge("a", "b", 4)
    path = save_graph(graph, tmp_path / "g.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b", "weight": 4}]}


def test_out_of_range_weights_are_kept() -> None:
    graph = loads_graph('{"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b", "weight": 0}]}')
    assert graph.edges[0].weight == 0


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"nodes": []}',
        '{"nodes": [{"name": "a"}], "edges": []}',
        '{"nodes": [{"id": "a"}, {"id": "a"}], "edges": []}',
        '{"nodes": [{"id": "a"}], "edges": [{"from": "a", "to": "b", "weight": 1}]}',
        '{"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b", "weight": "5"}]}',
        '{"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b", "weight": true}]}',
    ],
)
def test_invalid_content_raises(text: str) -> None:
    with pytest.raises(GraphFileError):
        loads_graph(text)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(GraphFileError):
        load_graph(tmp_path / "absent.json")


def test_weight_too_large_for_a_float_raises() -> None:
    text = '{"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b", "weight": 1' + "0" * 400 + "}]}"
    with pytest.raises(GraphFileError, match="too large"):
        loads_graph(text)
