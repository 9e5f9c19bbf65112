"""Layout configuration: defaults plus an optional TOML override file.

Example `mindmap.toml`:

    [layout]
    ring_radius = 120
    iterations = 800
    viewport_width = 1600
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class LayoutConfig:
    """Constants used by scoring, planning, relaxation and refinement."""

    # Importance
    betweenness_weight: float = 5.0

    # Enhanced strategy
    base_edge_length: float = 200.0
    min_edge_length: float = 50.0
    weight_length_factor: float = 70.0
    importance_length_factor: float = 50.0
    base_repulsion: float = 4_500_000.0
    base_elasticity: float = 100.0
    elasticity_per_weight: float = 3.0

    # Fallback strategy
    fallback_edge_length: float = 150.0
    fallback_length_per_weight: float = 1.2
    fallback_repulsion: float = 500_000.0
    fallback_elasticity: float = 180.0
    center_pull_threshold: float = 0.8

    # Post-layout refinement
    ring_radius: float = 100.0
    penalty_scale: float = 20.0
    correction_factor: float = 0.3
    ring_duration_ms: int = 500
    correction_duration_ms: int = 300

    # Relaxation
    iterations: int = 500
    initial_temperature: float = 100.0
    cooling_factor: float = 0.95
    min_temperature: float = 0.01
    gravity: float = 0.25
    viewport_width: float = 1200.0
    viewport_height: float = 800.0

    # Highlight
    max_depth: int = 3


DEFAULT_CONFIG = LayoutConfig()

_POSITIVE = {
    "min_edge_length",
    "base_repulsion",
    "fallback_repulsion",
    "penalty_scale",
    "initial_temperature",
    "viewport_width",
    "viewport_height",
}


def _coerce(name: str, value: Any, default: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"layout.{name} must be a number")
    if isinstance(default, int):
        if not isinstance(value, int):
            raise ValueError(f"layout.{name} must be an integer")
        return value
    if not isinstance(value, (int, float)):
        raise ValueError(f"layout.{name} must be a number")
    return float(value)


def config_from_dict(data: dict[str, Any]) -> LayoutConfig:
    """Apply the `[layout]` table of `data` over the defaults.

    Unknown keys are ignored.
    """
    table = data.get("layout", {})
    if not isinstance(table, dict):
        raise ValueError("[layout] must be a table")

    overrides: dict[str, Any] = {}
    for f in fields(LayoutConfig):
        if f.name in table:
            overrides[f.name] = _coerce(f.name, table[f.name], f.default)

    config = replace(DEFAULT_CONFIG, **overrides)

    for name in _POSITIVE:
        if getattr(config, name) <= 0:
            raise ValueError(f"layout.{name} must be positive")
    if not 0 < config.cooling_factor < 1:
        raise ValueError("layout.cooling_factor must be between 0 and 1")
    if config.iterations < 0:
        raise ValueError("layout.iterations must not be negative")
    if not 1 <= config.max_depth <= 3:
        raise ValueError("layout.max_depth must be between 1 and 3")

    return config


def load_config(path: Path | None) -> LayoutConfig:
    """Load configuration from TOML, or return defaults when `path` is None."""
    if path is None:
        return DEFAULT_CONFIG

    import tomllib

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return config_from_dict(data)
