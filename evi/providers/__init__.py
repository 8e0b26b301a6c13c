"""Snapshot providers that feed the EVI engine."""

from .demo import generate_demo_snapshot, score_components

__all__ = [
    "generate_demo_snapshot",
    "score_components",
]
