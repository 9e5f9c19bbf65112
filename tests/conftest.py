"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from mindmap.graph.model import ConceptGraph
from mindmap.graph.parser import parse_relations

SAMPLE_TEXT = "\n".join(
    [
        "{toxic shame}(08){addictions}",
        "{self-worth}(06){relationships}",
        "{toxic shame}(12){self-worth}",
        "{addictions}(05){relationships}",
        "{childhood}(20){toxic shame}",
        "",
    ]
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def sample_graph() -> ConceptGraph:
    return parse_relations(SAMPLE_TEXT)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "ideas.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def star_graph() -> ConceptGraph:
    """Center n with leaves a, b, c."""
    graph = ConceptGraph()
    for leaf in ("a", "b", "c"):
        graph.add_edge("n", leaf, 10)
    return graph


@pytest.fixture
def path_graph() -> ConceptGraph:
    """a - b - c - d - e, equal weights."""
    graph = ConceptGraph()
    names = ["a", "b", "c", "d", "e"]
    for src, dst in zip(names, names[1:]):
        graph.add_edge(src, dst, 5)
    return graph
