"""Relation text parsing."""

import re

from .model import ConceptGraph

# Match {Concept A}(WW){Concept B}; WW is one or two decimal digits
RELATION_PATTERN = re.compile(r"\{([^{}]+)\}\(([0-9]{1,2})\)\{([^{}]+)\}")


def extract_relations(text: str) -> list[tuple[str, str, int]]:
    """Extract (from, to, weight) triples, one per matching line.

    Lines that do not contain a relation are skipped without diagnostics.
    Concept names are trimmed; the first relation on a line wins.
    """
    result = []
    for line in text.strip().split("\n"):
        if not line.strip():
            continue
        match = RELATION_PATTERN.search(line)
        if not match:
            continue
        source = match.group(1).strip()
        target = match.group(3).strip()
        if not source or not target:
            continue
        result.append((source, target, int(match.group(2), 10)))
    return result


def parse_relations(text: str) -> ConceptGraph:
    """Build a graph from relation text."""
    graph = ConceptGraph()
    for source, target, weight in extract_relations(text):
        graph.add_edge(source, target, weight)
    return graph
