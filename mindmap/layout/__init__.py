"""Importance scoring, layout planning and post-layout refinement."""

from .crossings import crossing_penalties
from .engine import EngineNotReady, ForceEngine, LayoutEngine, reset_view, zoom_in, zoom_out
from .importance import normalize_scores, score_nodes
from .planner import LayoutParams, plan_enhanced, plan_fallback, plan_layout, run_layout
from .refine import pull_toward_center, refine_layout
from .tiers import assign_tiers, group_by_tier

__all__ = [
    "crossing_penalties",
    "EngineNotReady",
    "ForceEngine",
    "LayoutEngine",
    "reset_view",
    "zoom_in",
    "zoom_out",
    "normalize_scores",
    "score_nodes",
    "LayoutParams",
    "plan_enhanced",
    "plan_fallback",
    "plan_layout",
    "run_layout",
    "pull_toward_center",
    "refine_layout",
    "assign_tiers",
    "group_by_tier",
]
