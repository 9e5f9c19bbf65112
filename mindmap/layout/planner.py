"""Layout planning: turn importance and weights into engine parameters.

Two strategies produce the same `LayoutParams` shape:

- enhanced: importance with betweenness, crossing penalties, tiered refinement
- fallback: degree/weight-only importance and a simple center pull

`plan_layout` and `run_layout` try the enhanced strategy first and fall back on
any failure, so a graph always ends up laid out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..graph.model import ConceptGraph
from ..models import EngineEdge, ImportanceScore, NodeMove, Tier
from .crossings import Penalties, crossing_penalties
from .engine import LayoutEngine
from .importance import score_nodes
from .refine import pull_toward_center, refine_layout
from .tiers import assign_tiers

logger = logging.getLogger(__name__)

ENHANCED = "enhanced"
FALLBACK = "fallback"


@dataclass
class LayoutParams:
    """Parameter callbacks and settings the engine evaluates during relaxation."""

    strategy: str
    ideal_edge_length: Callable[[EngineEdge], float]
    node_repulsion: Callable[[str], float]
    edge_elasticity: Callable[[EngineEdge], float]
    scores: dict[str, ImportanceScore]
    tiers: dict[str, Tier]
    penalties: Penalties = field(default_factory=dict)
    iterations: int = DEFAULT_CONFIG.iterations
    initial_temperature: float = DEFAULT_CONFIG.initial_temperature
    cooling_factor: float = DEFAULT_CONFIG.cooling_factor
    min_temperature: float = DEFAULT_CONFIG.min_temperature
    gravity: float = DEFAULT_CONFIG.gravity
    on_settle: Callable[[LayoutEngine], Any] | None = None
    moves: list[NodeMove] = field(default_factory=list)

    @property
    def normalized(self) -> dict[str, float]:
        return {node_id: s.normalized for node_id, s in self.scores.items()}


def _relaxation_settings(config: LayoutConfig) -> dict[str, Any]:
    return {
        "iterations": config.iterations,
        "initial_temperature": config.initial_temperature,
        "cooling_factor": config.cooling_factor,
        "min_temperature": config.min_temperature,
        "gravity": config.gravity,
    }


def plan_enhanced(
    graph: ConceptGraph,
    engine: LayoutEngine | None,
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutParams:
    """Importance + crossing-penalty driven parameters."""
    scores = score_nodes(graph, engine, config=config)
    penalties = crossing_penalties(graph)
    tiers = assign_tiers(scores)

    def norm(node_id: str) -> float:
        score = scores.get(node_id)
        return score.normalized if score is not None else 0.5

    def ideal_edge_length(edge: EngineEdge) -> float:
        weight_factor = edge.weight / 20
        importance_factor = max(norm(edge.source), norm(edge.target)) / 25
        return max(
            config.min_edge_length,
            config.base_edge_length
            - weight_factor * config.weight_length_factor
            - importance_factor * config.importance_length_factor,
        )

    def node_repulsion(node_id: str) -> float:
        # important nodes repel less and drift to the center
        return config.base_repulsion * (1.5 - norm(node_id) * 0.8)

    def edge_elasticity(edge: EngineEdge) -> float:
        return config.base_elasticity + edge.weight * config.elasticity_per_weight

    params = LayoutParams(
        strategy=ENHANCED,
        ideal_edge_length=ideal_edge_length,
        node_repulsion=node_repulsion,
        edge_elasticity=edge_elasticity,
        scores=scores,
        tiers=tiers,
        penalties=penalties,
        **_relaxation_settings(config),
    )

    def on_settle(settled: LayoutEngine) -> None:
        params.moves = refine_layout(settled, tiers, penalties, config=config)

    params.on_settle = on_settle
    return params


def plan_fallback(graph: ConceptGraph, *, config: LayoutConfig = DEFAULT_CONFIG) -> LayoutParams:
    """Degree/weight-only parameters; no centrality, no crossing penalties."""
    scores = score_nodes(graph, None, config=config, use_centrality=False)
    tiers = assign_tiers(scores)

    def norm(node_id: str) -> float:
        score = scores.get(node_id)
        return score.normalized if score is not None else 0.5

    def ideal_edge_length(edge: EngineEdge) -> float:
        return config.fallback_edge_length - edge.weight * config.fallback_length_per_weight

    def node_repulsion(node_id: str) -> float:
        return config.fallback_repulsion * (1.5 - norm(node_id) * 0.8)

    def edge_elasticity(edge: EngineEdge) -> float:
        return config.fallback_elasticity * (edge.weight / 50 + 0.5)

    params = LayoutParams(
        strategy=FALLBACK,
        ideal_edge_length=ideal_edge_length,
        node_repulsion=node_repulsion,
        edge_elasticity=edge_elasticity,
        scores=scores,
        tiers=tiers,
        **_relaxation_settings(config),
    )

    def on_settle(settled: LayoutEngine) -> None:
        params.moves = pull_toward_center(settled, params.normalized, config=config)

    params.on_settle = on_settle
    return params


def plan_layout(
    graph: ConceptGraph,
    engine: LayoutEngine | None,
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutParams:
    """Plan with the enhanced strategy, falling back on any failure."""
    try:
        return plan_enhanced(graph, engine, config=config)
    except Exception as e:
        logger.warning("Enhanced layout planning failed, using fallback: %s", e)
        return plan_fallback(graph, config=config)


def run_layout(
    graph: ConceptGraph,
    engine: LayoutEngine,
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutParams:
    """Load the graph into the engine, plan, relax and refine.

    If the enhanced strategy fails at any point (planning, relaxation or
    refinement), the engine is reloaded and the fallback runs from scratch.
    """
    node_ids, edges = graph.to_elements()
    engine.load(node_ids, edges)
    try:
        params = plan_enhanced(graph, engine, config=config)
        engine.run(params)
        return params
    except Exception as e:
        logger.warning("Enhanced layout failed, using fallback: %s", e)

    engine.load(node_ids, edges)
    params = plan_fallback(graph, config=config)
    engine.run(params)
    return params
