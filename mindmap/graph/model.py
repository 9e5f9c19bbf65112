"""Concept graph container."""

from dataclasses import dataclass, field

from ..models import Edge, EngineEdge, Node


@dataclass
class ConceptGraph:
    """Undirected weighted multigraph of concepts.

    Nodes keep insertion order; edges are append-only and never merged.
    """

    nodes: dict[str, Node] = field(default_factory=dict)  # id -> Node
    edges: list[Edge] = field(default_factory=list)

    @classmethod
    def from_records(cls, nodes: list[dict], edges: list[dict]) -> "ConceptGraph":
        """Build graph from persisted node/edge records.

        Records are assumed to be schema-checked already (see `store`).
        """
        graph = cls()
        for node in nodes:
            graph.add_node(node["id"])
        for edge in edges:
            graph.add_edge(edge["from"], edge["to"], edge["weight"])
        return graph

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def add_node(self, node_id: str) -> Node:
        """Insert a node if absent; return the stored node."""
        node = self.nodes.get(node_id)
        if node is None:
            node = Node(node_id)
            self.nodes[node_id] = node
        return node

    def add_edge(self, source: str, target: str, weight: int) -> Edge:
        """Append an edge, creating missing endpoints first."""
        self.add_node(source)
        self.add_node(target)
        edge = Edge(source, target, weight)
        self.edges.append(edge)
        return edge

    def connected_nodes(self, node_id: str) -> list[str]:
        """Distinct neighbor ids in first-seen order, self excluded."""
        seen: dict[str, None] = {}
        for edge in self.edges:
            if edge.source == node_id and edge.target != node_id:
                seen.setdefault(edge.target)
            elif edge.target == node_id and edge.source != node_id:
                seen.setdefault(edge.source)
        return list(seen)

    def connected_edges(self, node_id: str) -> list[Edge]:
        """All edges incident to `node_id`, in insertion order."""
        return [edge for edge in self.edges if edge.touches(node_id)]

    def neighbor_lists(self) -> dict[str, list[str]]:
        """Neighbor multiset per node (parallel edges repeat the neighbor)."""
        out: dict[str, list[str]] = {node_id: [] for node_id in self.nodes}
        for edge in self.edges:
            out.setdefault(edge.source, []).append(edge.target)
            out.setdefault(edge.target, []).append(edge.source)
        return out

    def edge_ids(self) -> list[str]:
        """Stable display identifiers, aligned with `edges`."""
        return [f"edge-{e.source}-{e.target}-{i}" for i, e in enumerate(self.edges)]

    def to_elements(self) -> tuple[list[str], list[EngineEdge]]:
        """Return (node ids, engine edge records) for the layout engine."""
        engine_edges = [
            EngineEdge(id=edge_id, source=e.source, target=e.target, weight=e.weight)
            for edge_id, e in zip(self.edge_ids(), self.edges)
        ]
        return list(self.nodes), engine_edges

    def to_records(self) -> dict:
        """Return the persisted representation."""
        return {
            "nodes": [{"id": node_id} for node_id in self.nodes],
            "edges": [e.to_record() for e in self.edges],
        }
