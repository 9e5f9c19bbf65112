"""Event-driven session tying parsing, layout and highlighting together."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import DEFAULT_CONFIG, LayoutConfig
from .graph.model import ConceptGraph
from .graph.parser import parse_relations
from .graph.store import load_graph, save_graph
from .highlight import HighlightPropagator
from .layout.engine import ForceEngine, LayoutEngine
from .layout.planner import LayoutParams, run_layout
from .models import ImportanceScore, Tier

logger = logging.getLogger(__name__)


class Session:
    """Single-threaded controller for one engine handle.

    Each handler runs to completion: parse/load rebuild the graph, rescore and
    relayout it and clear the selection; select retags the neighborhood.
    """

    def __init__(self, engine: LayoutEngine | None = None, *, config: LayoutConfig = DEFAULT_CONFIG):
        self.config = config
        self.engine = engine or ForceEngine(config.viewport_width, config.viewport_height)
        self.graph = ConceptGraph()
        self.layout: LayoutParams | None = None
        self.highlight = HighlightPropagator(self.graph, max_depth=config.max_depth)

    @property
    def scores(self) -> dict[str, ImportanceScore]:
        return self.layout.scores if self.layout else {}

    @property
    def tiers(self) -> dict[str, Tier]:
        return self.layout.tiers if self.layout else {}

    @property
    def selected(self) -> str | None:
        return self.highlight.selected

    @property
    def connected_nodes(self) -> list[str]:
        """Direct neighbors of the current selection."""
        if self.highlight.selected is None:
            return []
        return self.graph.connected_nodes(self.highlight.selected)

    def parse(self, text: str) -> ConceptGraph:
        """Replace the graph with the relations found in `text`."""
        self._replace_graph(parse_relations(text))
        return self.graph

    def load(self, path: Path) -> ConceptGraph:
        """Replace the graph with a saved one.

        Raises GraphFileError on unreadable or invalid files; the current graph
        is left untouched in that case.
        """
        graph = load_graph(path)
        self._replace_graph(graph)
        return self.graph

    def save(self, path: Path) -> Path:
        return save_graph(self.graph, path)

    def select(self, node_id: str | None) -> None:
        """Node tap (id) or background tap (None)."""
        self.highlight.select(node_id)

    def clear_selection(self) -> None:
        self.highlight.clear()

    def _replace_graph(self, graph: ConceptGraph) -> None:
        highlight = HighlightPropagator(graph, max_depth=self.config.max_depth)
        try:
            layout = run_layout(graph, self.engine, config=self.config)
        except Exception:
            # the engine already holds the rejected elements; put the current graph back
            self.layout = run_layout(self.graph, self.engine, config=self.config)
            raise

        self.graph = graph
        self.highlight = highlight
        self.layout = layout
        logger.info(
            "Laid out %d nodes / %d edges with %s strategy",
            len(graph.nodes),
            len(graph.edges),
            layout.strategy,
        )
