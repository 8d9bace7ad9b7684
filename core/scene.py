"""
SceneState — the explicit context handed to every interaction each
frame, in place of global stores.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from core.topology import TopologyController
from domain.particles import ParticleSet
from utils.constants import REPEL_RADIUS, REPEL_STRENGTH, SELECT_DISTANCE


@dataclass
class SceneState:
    particles: ParticleSet
    topology: TopologyController
    category_indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int32))
    category_names: List[str] = field(default_factory=list)
    base_colors: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    visible: Optional[np.ndarray] = None   # per-particle bool mask, None = all shown

    repel_radius: float = REPEL_RADIUS
    repel_strength: float = REPEL_STRENGTH
    select_distance: float = SELECT_DISTANCE

    @classmethod
    def create(cls, particles: Optional[ParticleSet] = None, **kwargs) -> "SceneState":
        particles = particles or ParticleSet()
        return cls(particles=particles, topology=TopologyController(particles), **kwargs)

    @property
    def count(self) -> int:
        return self.particles.count

    def sync_base_colors(self) -> None:
        """Current colours become the resting colours feedback eases back to."""
        self.base_colors = self.particles.colors.copy()
