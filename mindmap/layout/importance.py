"""Node importance scoring and normalization."""

from __future__ import annotations

import logging
from typing import Any

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..graph.model import ConceptGraph
from ..models import ImportanceScore

logger = logging.getLogger(__name__)


def score_nodes(
    graph: ConceptGraph,
    engine: Any = None,
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
    use_centrality: bool = True,
) -> dict[str, ImportanceScore]:
    """Score every node by degree, incident weight and (optionally) betweenness.

    Centrality is taken from `engine.betweenness()` when the engine offers it.
    A missing or failing capability leaves betweenness at 0 for every node.
    Normalized values are filled in before returning.
    """
    degree: dict[str, int] = {node_id: 0 for node_id in graph.nodes}
    total: dict[str, int] = {node_id: 0 for node_id in graph.nodes}
    for edge in graph.edges:
        # self-loops count once, matching connected_edges()
        for end in {edge.source, edge.target}:
            degree[end] += 1
            total[end] += edge.weight

    scores: dict[str, ImportanceScore] = {}
    for node_id in graph.nodes:
        d = degree[node_id]
        tw = total[node_id]
        avg = tw / d if d > 0 else 0
        scores[node_id] = ImportanceScore(
            degree=d,
            total_weight=tw,
            avg_weight=avg,
            composite_score=d * (avg or 1),
        )

    betweenness = _centrality(engine) if use_centrality else {}
    for node_id, score in scores.items():
        value = betweenness.get(node_id, 0.0)
        score.betweenness = value
        score.composite_score += value * config.betweenness_weight

    normalize_scores(scores)
    return scores


def _centrality(engine: Any) -> dict[str, float]:
    capability = getattr(engine, "betweenness", None)
    if capability is None:
        return {}
    try:
        return dict(capability())
    except Exception as e:
        logger.warning("Betweenness centrality unavailable, using 0: %s", e)
        return {}


def normalize_scores(scores: dict[str, ImportanceScore]) -> dict[str, float]:
    """Min-max rescale composite scores into [0, 1] in place.

    If every score is equal (including a single node), all get 0.5.
    """
    if not scores:
        return {}

    values = [s.composite_score for s in scores.values()]
    low = min(values)
    span = max(values) - low

    normalized: dict[str, float] = {}
    for node_id, score in scores.items():
        score.normalized = (score.composite_score - low) / span if span > 0 else 0.5
        normalized[node_id] = score.normalized
    return normalized
