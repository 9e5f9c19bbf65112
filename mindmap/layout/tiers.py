"""Percentile-based importance tiers."""

from ..models import ImportanceScore, Tier

# (upper percentile bound, tier); the last tier takes everything else
TIER_BOUNDS: list[tuple[float, Tier]] = [(0.1, 0), (0.3, 1), (0.6, 2)]


def assign_tiers(scores: dict[str, ImportanceScore]) -> dict[str, Tier]:
    """Bucket nodes into tiers 0-3 by descending composite score.

    Tier 0 is the top 10%, tier 1 the next 20%, tier 2 the next 30% and tier 3
    the remaining 40%. Ties keep the input order (stable sort). The returned
    dict is ordered by rank.
    """
    ranked = sorted(scores, key=lambda node_id: -scores[node_id].composite_score)
    count = len(ranked)

    tiers: dict[str, Tier] = {}
    for rank, node_id in enumerate(ranked):
        percentile = rank / count
        tiers[node_id] = next((tier for bound, tier in TIER_BOUNDS if percentile < bound), 3)
    return tiers


def group_by_tier(tiers: dict[str, Tier]) -> dict[Tier, list[str]]:
    """Return tier -> node ids, preserving rank order within each tier."""
    groups: dict[Tier, list[str]] = {0: [], 1: [], 2: [], 3: []}
    for node_id, tier in tiers.items():
        groups[tier].append(node_id)
    return groups
