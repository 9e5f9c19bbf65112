"""Layout engine handle and a headless force-directed implementation.

The engine owns node positions, the viewport and the relaxation loop. Planning
and refinement code never touches positions directly; they receive the engine
handle explicitly and go through this interface.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable, Protocol

from ..models import EngineEdge, NodeMove, Position

if TYPE_CHECKING:
    from .planner import LayoutParams

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.1
MAX_ZOOM = 3.0

# Relaxation force scaling; keeps repulsion (~1e6) and elasticity (~1e2) comparable
REPULSION_SCALE = 0.01
SPRING_SCALE = 0.001
GRAVITY_SCALE = 0.01


class EngineNotReady(RuntimeError):
    """Raised by viewport operations before any elements were loaded."""


class LayoutEngine(Protocol):
    """What the core needs from a graph rendering/simulation engine."""

    def load(self, node_ids: Iterable[str], edges: Iterable[EngineEdge]) -> None: ...

    def node_ids(self) -> list[str]: ...

    def edges(self) -> list[EngineEdge]: ...

    def position(self, node_id: str) -> Position | None: ...

    def viewport_center(self) -> Position: ...

    def animate(self, node_id: str, position: Position, duration_ms: int) -> None: ...

    def run(self, params: "LayoutParams") -> None: ...

    def zoom_by(self, factor: float) -> None: ...

    def fit(self, padding: float = 50.0) -> None: ...


class ForceEngine:
    """Deterministic spring/repulsion relaxation evaluated from layout callbacks.

    Initial placement is a circle in node insertion order (no randomization),
    so identical input always settles to identical positions.
    """

    def __init__(self, width: float = 1200.0, height: float = 800.0):
        self.width = width
        self.height = height
        self.zoom = 1.0
        self.pan: Position = (0.0, 0.0)
        self.animations: list[NodeMove] = []
        self.settled = False
        self._nodes: list[str] = []
        self._edges: list[EngineEdge] = []
        self._positions: dict[str, Position] = {}
        self._loaded = False

    # -- elements ---------------------------------------------------------

    def load(self, node_ids: Iterable[str], edges: Iterable[EngineEdge]) -> None:
        """Replace all elements and reset positions to the initial circle."""
        self._nodes = list(node_ids)
        self._edges = list(edges)
        self.animations = []
        self.settled = False
        self._positions = self._initial_positions()
        self._loaded = True

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def edges(self) -> list[EngineEdge]:
        return list(self._edges)

    def position(self, node_id: str) -> Position | None:
        return self._positions.get(node_id)

    def positions(self) -> dict[str, Position]:
        return dict(self._positions)

    def viewport_center(self) -> Position:
        return (self.width / 2, self.height / 2)

    def animate(self, node_id: str, position: Position, duration_ms: int) -> None:
        """Record an animated move; headless, so the end state applies at once."""
        if node_id not in self._positions:
            return
        self.animations.append(NodeMove(node_id, position, duration_ms))
        self._positions[node_id] = position

    # -- capabilities -----------------------------------------------------

    def betweenness(self) -> dict[str, float]:
        """Normalized betweenness centrality over the simple undirected view."""
        import networkx as nx

        g = nx.Graph()
        g.add_nodes_from(self._nodes)
        g.add_edges_from((e.source, e.target) for e in self._edges if e.source != e.target)
        return {n: float(v) for n, v in nx.betweenness_centrality(g, normalized=True).items()}

    # -- relaxation -------------------------------------------------------

    def run(self, params: "LayoutParams") -> None:
        """Relax positions using the planner's callbacks, then notify settle once."""
        self.settled = False
        self._relax(params)
        self.settled = True
        logger.debug("Relaxation settled for %d nodes (%s)", len(self._nodes), params.strategy)
        if params.on_settle is not None:
            params.on_settle(self)

    def _initial_positions(self) -> dict[str, Position]:
        cx, cy = self.viewport_center()
        n = len(self._nodes)
        if n == 1:
            return {self._nodes[0]: (cx, cy)}
        radius = min(self.width, self.height) / 3
        out: dict[str, Position] = {}
        for i, node_id in enumerate(self._nodes):
            angle = 2 * math.pi * i / n
            out[node_id] = (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        return out

    def _relax(self, params: "LayoutParams") -> None:
        nodes = self._nodes
        if not nodes:
            return

        pos = {n: list(self._positions[n]) for n in nodes}
        repulsion = {n: float(params.node_repulsion(n)) for n in nodes}
        springs = [
            (e.source, e.target, float(params.ideal_edge_length(e)), float(params.edge_elasticity(e)))
            for e in self._edges
            if e.source != e.target
        ]
        cx, cy = self.viewport_center()
        temperature = params.initial_temperature

        for _ in range(params.iterations):
            if temperature < params.min_temperature:
                break

            disp = {n: [0.0, 0.0] for n in nodes}

            for i, a in enumerate(nodes):
                for b in nodes[i + 1 :]:
                    dx = pos[a][0] - pos[b][0]
                    dy = pos[a][1] - pos[b][1]
                    dist2 = dx * dx + dy * dy
                    if dist2 < 1e-6:
                        dx, dy, dist2 = 1.0, 0.0, 1.0
                    dist = math.sqrt(dist2)
                    force = (repulsion[a] + repulsion[b]) / 2 / dist2 * REPULSION_SCALE
                    fx = dx / dist * force
                    fy = dy / dist * force
                    disp[a][0] += fx
                    disp[a][1] += fy
                    disp[b][0] -= fx
                    disp[b][1] -= fy

            for src, tgt, length, elasticity in springs:
                dx = pos[tgt][0] - pos[src][0]
                dy = pos[tgt][1] - pos[src][1]
                dist = max(math.hypot(dx, dy), 1e-3)
                force = elasticity * (dist - length) * SPRING_SCALE
                fx = dx / dist * force
                fy = dy / dist * force
                disp[src][0] += fx
                disp[src][1] += fy
                disp[tgt][0] -= fx
                disp[tgt][1] -= fy

            for n in nodes:
                disp[n][0] += (cx - pos[n][0]) * params.gravity * GRAVITY_SCALE
                disp[n][1] += (cy - pos[n][1]) * params.gravity * GRAVITY_SCALE
                length = math.hypot(disp[n][0], disp[n][1])
                if length > temperature:
                    disp[n][0] *= temperature / length
                    disp[n][1] *= temperature / length
                pos[n][0] += disp[n][0]
                pos[n][1] += disp[n][1]

            temperature *= params.cooling_factor

        self._positions = {n: (p[0], p[1]) for n, p in pos.items()}

    # -- viewport ---------------------------------------------------------

    def zoom_by(self, factor: float) -> None:
        if not self._loaded:
            raise EngineNotReady("engine has no elements loaded")
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, self.zoom * factor))

    def fit(self, padding: float = 50.0) -> None:
        """Zoom and pan so every node fits the viewport with `padding`."""
        if not self._loaded:
            raise EngineNotReady("engine has no elements loaded")
        if not self._positions:
            self.zoom, self.pan = 1.0, (0.0, 0.0)
            return
        xs = [p[0] for p in self._positions.values()]
        ys = [p[1] for p in self._positions.values()]
        w = max(max(xs) - min(xs), 1.0)
        h = max(max(ys) - min(ys), 1.0)
        avail_w = max(self.width - 2 * padding, 1.0)
        avail_h = max(self.height - 2 * padding, 1.0)
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, min(avail_w / w, avail_h / h)))
        cx, cy = self.viewport_center()
        self.pan = (cx - (min(xs) + w / 2) * self.zoom, cy - (min(ys) + h / 2) * self.zoom)


def zoom_in(engine: LayoutEngine) -> bool:
    """Zoom in by 20%; failures are logged, never raised."""
    try:
        engine.zoom_by(1.2)
        return True
    except Exception as e:
        logger.warning("Error zooming in: %s", e)
        return False


def zoom_out(engine: LayoutEngine) -> bool:
    try:
        engine.zoom_by(0.8)
        return True
    except Exception as e:
        logger.warning("Error zooming out: %s", e)
        return False


def reset_view(engine: LayoutEngine) -> bool:
    try:
        engine.fit(50.0)
        return True
    except Exception as e:
        logger.warning("Error resetting view: %s", e)
        return False
