"""One-shot position corrections applied after the relaxation settles."""

from __future__ import annotations

import math

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..models import NodeMove, Position, Tier
from .crossings import Penalties
from .engine import LayoutEngine
from .tiers import group_by_tier


def refine_layout(
    engine: LayoutEngine,
    tiers: dict[str, Tier],
    penalties: Penalties,
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[NodeMove]:
    """Put tier-0 nodes on a centered ring, then nudge the rest by crossing penalty.

    Every correction is computed against the positions as they were when the
    relaxation settled; moves made in this pass are not fed back into it.
    Returns the moves in the order they were applied.
    """
    snapshot: dict[str, Position] = {}
    for node_id in engine.node_ids():
        p = engine.position(node_id)
        if p is not None:
            snapshot[node_id] = p

    groups = group_by_tier(tiers)
    moves: list[NodeMove] = []

    ring = [n for n in groups[0] if n in snapshot]
    if ring:
        cx, cy = engine.viewport_center()
        step = 2 * math.pi / len(ring)
        for index, node_id in enumerate(ring):
            angle = step * index
            target = (cx + config.ring_radius * math.cos(angle), cy + config.ring_radius * math.sin(angle))
            moves.append(NodeMove(node_id, target, config.ring_duration_ms))

    for tier in (1, 2, 3):
        for node_id in groups[tier]:
            position = snapshot.get(node_id)
            if position is None:
                continue

            adjust_x = 0.0
            adjust_y = 0.0
            for other_id, penalty in penalties.get(node_id, {}).items():
                other = snapshot.get(other_id)
                if other is None:
                    continue
                dx = position[0] - other[0]
                dy = position[1] - other[1]
                distance = math.hypot(dx, dy)
                if distance > 0:
                    force = penalty / config.penalty_scale
                    adjust_x += dx / distance * force
                    adjust_y += dy / distance * force

            target = (
                position[0] + adjust_x * config.correction_factor,
                position[1] + adjust_y * config.correction_factor,
            )
            moves.append(NodeMove(node_id, target, config.correction_duration_ms))

    for move in moves:
        engine.animate(move.node_id, move.position, move.duration_ms)
    return moves


def pull_toward_center(
    engine: LayoutEngine,
    normalized: dict[str, float],
    *,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[NodeMove]:
    """Move the most important nodes 10-20% of the way to the viewport center.

    Settle step of the fallback layout: only nodes whose normalized importance
    exceeds `config.center_pull_threshold` move.
    """
    cx, cy = engine.viewport_center()
    threshold = config.center_pull_threshold
    moves: list[NodeMove] = []
    for node_id in engine.node_ids():
        importance = normalized.get(node_id, 0.0)
        position = engine.position(node_id)
        if position is None or importance <= threshold:
            continue
        ratio = 0.1 + (importance - threshold) * 0.25
        target = (
            position[0] + (cx - position[0]) * ratio,
            position[1] + (cy - position[1]) * ratio,
        )
        moves.append(NodeMove(node_id, target, config.ring_duration_ms))

    for move in moves:
        engine.animate(move.node_id, move.position, move.duration_ms)
    return moves
