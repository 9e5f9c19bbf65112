"""Pairwise crossing penalties between nodes."""

from collections import Counter

from ..graph.model import ConceptGraph

Penalties = dict[str, dict[str, int]]


def crossing_penalties(graph: ConceptGraph) -> Penalties:
    """Estimate, for every unordered node pair, whether to keep them apart.

    Positive values mean placing the pair side by side would route many
    independent edges across each other; negative values mean the pair shares
    neighbors and benefits from proximity.

    penalty(A, B) = potential_crossings - 2 * shared, where neighbor lists are
    multisets (parallel edges repeat a neighbor).
    """
    neighbors = graph.neighbor_lists()
    counts = {node_id: Counter(nbrs) for node_id, nbrs in neighbors.items()}
    nodes = list(graph.nodes)

    penalties: Penalties = {node_id: {} for node_id in nodes}
    for i, a in enumerate(nodes):
        nbrs_a = neighbors[a]
        for b in nodes[i + 1 :]:
            nbrs_b = neighbors[b]

            shared = sum(1 for x in nbrs_a if x in counts[b])

            # pairs (x, y) with x != b, y != a, x != y
            others_a = [x for x in nbrs_a if x != b]
            others_b = Counter(y for y in nbrs_b if y != a)
            size_b = sum(others_b.values())
            crossings = sum(size_b - others_b[x] for x in others_a)

            penalty = crossings - shared * 2
            penalties[a][b] = penalty
            penalties[b][a] = penalty

    return penalties
