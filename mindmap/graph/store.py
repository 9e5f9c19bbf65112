"""JSON persistence for concept graphs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .model import ConceptGraph


class GraphFileError(ValueError):
    """Raised when a saved graph cannot be read or does not match the schema."""


def dumps_graph(graph: ConceptGraph) -> str:
    return json.dumps(graph.to_records(), indent=2, ensure_ascii=False) + "\n"


def save_graph(graph: ConceptGraph, path: Path) -> Path:
    """Write graph to `path` in the persisted JSON format."""
    path.write_text(dumps_graph(graph), encoding="utf-8")
    return path


def loads_graph(text: str) -> ConceptGraph:
    """Parse persisted JSON text into a graph.

    Weights are kept exactly as stored, including values outside 1..99.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFileError(f"Invalid JSON file: {e.msg} (line {e.lineno})") from e

    nodes, edges = _validate(data)
    return ConceptGraph.from_records(nodes, edges)


def load_graph(path: Path) -> ConceptGraph:
    """Read a graph saved by `save_graph`."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GraphFileError(f"Error reading file: {path}") from e
    return loads_graph(text)


def _validate(data: Any) -> tuple[list[dict], list[dict]]:
    if not isinstance(data, dict):
        raise GraphFileError("Graph file must contain a JSON object")

    nodes = data.get("nodes")
    edges = data.get("edges")
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise GraphFileError("Graph file must have 'nodes' and 'edges' lists")

    ids: set[str] = set()
    for i, node in enumerate(nodes):
        if not isinstance(node, dict) or not isinstance(node.get("id"), str):
            raise GraphFileError(f"nodes[{i}] must be an object with a string 'id'")
        if node["id"] in ids:
            raise GraphFileError(f"nodes[{i}] duplicates id '{node['id']}'")
        ids.add(node["id"])

    for i, edge in enumerate(edges):
        if not isinstance(edge, dict):
            raise GraphFileError(f"edges[{i}] must be an object")
        for key in ("from", "to"):
            value = edge.get(key)
            if not isinstance(value, str):
                raise GraphFileError(f"edges[{i}].{key} must be a string")
            if value not in ids:
                raise GraphFileError(f"edges[{i}].{key} references unknown node '{value}'")
        weight = edge.get("weight")
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise GraphFileError(f"edges[{i}].weight must be an integer")
        try:
            float(weight)
        except OverflowError as e:
            raise GraphFileError(f"edges[{i}].weight is too large") from e

    return nodes, edges
