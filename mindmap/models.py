"""Data models for concept graphs, scores and highlight state."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

# 0 = most important (center), 3 = outer ring
Tier = Literal[0, 1, 2, 3]

Position = tuple[float, float]


@dataclass(frozen=True)
class Node:
    """A concept. Identity is the id string itself."""

    id: str


@dataclass(frozen=True)
class Edge:
    """An undirected, weighted relation between two concepts.

    Parallel edges between the same pair are distinct records.
    """

    source: str
    target: str
    weight: int

    def other(self, node_id: str) -> str:
        """Return the endpoint opposite to `node_id` (itself for self-loops)."""
        return self.target if self.source == node_id else self.source

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def to_record(self) -> dict:
        return {"from": self.source, "to": self.target, "weight": self.weight}


@dataclass(frozen=True)
class EngineEdge:
    """Edge record handed to the layout engine."""

    id: str
    source: str
    target: str
    weight: int


@dataclass
class ImportanceScore:
    """Structural importance of one node."""

    degree: int = 0
    total_weight: int = 0
    avg_weight: float = 0.0
    composite_score: float = 0.0
    betweenness: float = 0.0
    normalized: float = 0.5

    def to_dict(self) -> dict:
        return {
            "degree": self.degree,
            "total_weight": self.total_weight,
            "avg_weight": round(self.avg_weight, 3),
            "composite_score": round(self.composite_score, 3),
            "betweenness": round(self.betweenness, 4),
            "normalized": round(self.normalized, 4),
        }


class HighlightTag(str, Enum):
    """Distance-from-selection label; values double as style classes."""

    NONE = "none"
    SELECTED = "selected"
    DEGREE_1 = "degree-1"
    DEGREE_2 = "degree-2"
    DEGREE_3 = "degree-3"

    @classmethod
    def for_depth(cls, depth: int) -> "HighlightTag":
        return {1: cls.DEGREE_1, 2: cls.DEGREE_2, 3: cls.DEGREE_3}[depth]

    @property
    def depth(self) -> int | None:
        """Hop distance for this tag (0 for the selection, None when untagged)."""
        return {
            HighlightTag.SELECTED: 0,
            HighlightTag.DEGREE_1: 1,
            HighlightTag.DEGREE_2: 2,
            HighlightTag.DEGREE_3: 3,
        }.get(self)


@dataclass(frozen=True)
class NodeMove:
    """A single animated position change requested by a refiner."""

    node_id: str
    position: Position
    duration_ms: int
