"""
CollapseInteraction — fist pulls every particle to its category
centroid (or the origin when no categories are known).

Centroids are computed once per activation and cached until reset().
"""
from __future__ import annotations
from typing import Dict, Optional

from core.physics import apply_collapse, compute_centroids
from core.scene import SceneState
from domain.models import HandState, Vec3
from interactions.base import Interaction


class CollapseInteraction(Interaction):
    NAME = "COLLAPSE"

    def __init__(self) -> None:
        self._centroids: Optional[Dict[int, Vec3]] = None

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        p = scene.particles
        cats = scene.category_indices if scene.category_indices.size >= p.count else None

        if self._centroids is None and cats is not None:
            self._centroids = compute_centroids(p.base_positions, cats, p.count)

        apply_collapse(p.target_positions, p.count, self._centroids, cats)

    @property
    def centroids(self) -> Optional[Dict[int, Vec3]]:
        return self._centroids

    def reset(self) -> None:
        self._centroids = None
