"""
RepelInteraction — open hand pushes nearby particles away.
"""
from __future__ import annotations

from core.physics import apply_repel
from core.scene import SceneState
from domain.models import HandState
from interactions.base import Interaction


class RepelInteraction(Interaction):
    NAME = "REPEL"

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        p = scene.particles
        apply_repel(
            p.current_positions, p.target_positions, p.base_positions,
            hand.world_position, p.count,
            radius=scene.repel_radius, strength=scene.repel_strength,
        )

    def reset(self) -> None:
        pass
