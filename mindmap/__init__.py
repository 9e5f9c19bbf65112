"""mindmap - importance-weighted layout and highlight engine for concept maps."""

__version__ = "0.1.0"
