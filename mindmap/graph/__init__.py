"""Concept graph container, relation parsing and persistence."""

from .model import ConceptGraph
from .parser import extract_relations, parse_relations
from .store import GraphFileError, dumps_graph, load_graph, loads_graph, save_graph

__all__ = [
    "ConceptGraph",
    "extract_relations",
    "parse_relations",
    "GraphFileError",
    "dumps_graph",
    "load_graph",
    "loads_graph",
    "save_graph",
]
