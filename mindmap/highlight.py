"""Selection highlighting by breadth-first hop distance."""

from __future__ import annotations

import logging

from .graph.model import ConceptGraph
from .models import HighlightTag

logger = logging.getLogger(__name__)


class HighlightPropagator:
    """Tags nodes and edges by hop distance from the selected node.

    Two states: idle (nothing selected, everything untagged) and selected.
    Every selection retags from scratch; the first depth at which a node or
    edge is reached is the one it keeps.

    Edge tags are keyed by edge index in `graph.edges`.
    """

    def __init__(self, graph: ConceptGraph, *, max_depth: int = 3):
        if not 1 <= max_depth <= 3:
            raise ValueError(f"max_depth must be between 1 and 3, got {max_depth}")
        self.graph = graph
        self.max_depth = max_depth
        self.selected: str | None = None
        self.node_tags: dict[str, HighlightTag] = {}
        self.edge_tags: dict[int, HighlightTag] = {}
        self._incident: dict[str, list[int]] = {}
        for index, edge in enumerate(graph.edges):
            self._incident.setdefault(edge.source, []).append(index)
            if edge.target != edge.source:
                self._incident.setdefault(edge.target, []).append(index)
        self.clear()

    @property
    def is_idle(self) -> bool:
        return self.selected is None

    def clear(self) -> None:
        """Return to idle: every node and edge untagged."""
        self.selected = None
        self.node_tags = {node_id: HighlightTag.NONE for node_id in self.graph.nodes}
        self.edge_tags = {index: HighlightTag.NONE for index in range(len(self.graph.edges))}

    def select(self, node_id: str | None) -> None:
        """Handle a tap: a node id selects it, None (background) clears."""
        self.clear()
        if node_id is None:
            return
        if node_id not in self.graph:
            logger.warning("Ignoring selection of unknown node '%s'", node_id)
            return

        self.selected = node_id
        self.node_tags[node_id] = HighlightTag.SELECTED
        visited = {node_id}
        frontier = [node_id]

        for depth in range(1, self.max_depth + 1):
            tag = HighlightTag.for_depth(depth)
            next_frontier: list[str] = []
            for current in frontier:
                for index in self._incident.get(current, []):
                    edge_depth = self.edge_tags[index].depth
                    if edge_depth is not None and edge_depth < depth:
                        continue
                    self.edge_tags[index] = tag
                    other = self.graph.edges[index].other(current)
                    if other not in visited:
                        visited.add(other)
                        self.node_tags[other] = tag
                        next_frontier.append(other)
            frontier = next_frontier
            if not frontier:
                break

    def tagged_nodes(self, tag: HighlightTag) -> list[str]:
        return [node_id for node_id, t in self.node_tags.items() if t == tag]

    def tagged_edges(self, tag: HighlightTag) -> list[int]:
        return [index for index, t in self.edge_tags.items() if t == tag]

    def snapshot(self) -> dict:
        """Current tags as plain data: node id -> tag, edge id -> tag."""
        edge_ids = self.graph.edge_ids()
        return {
            "selected": self.selected,
            "nodes": {n: t.value for n, t in self.node_tags.items() if t != HighlightTag.NONE},
            "edges": {edge_ids[i]: t.value for i, t in self.edge_tags.items() if t != HighlightTag.NONE},
        }


def highlight_map(graph: ConceptGraph, *, max_depth: int = 3) -> dict[str, dict]:
    """Precompute the tag snapshot for every possible selection."""
    propagator = HighlightPropagator(graph, max_depth=max_depth)
    out: dict[str, dict] = {}
    for node_id in graph.nodes:
        propagator.select(node_id)
        snap = propagator.snapshot()
        out[node_id] = {"nodes": snap["nodes"], "edges": snap["edges"]}
    propagator.clear()
    return out
