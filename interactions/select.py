"""
SelectInteraction — pinch picks the particle under the hand for the
tooltip. Particles stay at rest.
"""
from __future__ import annotations

from core.physics import NOT_FOUND, apply_spring_back, find_nearest_particle
from core.scene import SceneState
from domain.models import HandState
from interactions.base import Interaction


class SelectInteraction(Interaction):
    NAME = "SELECT"

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        p = scene.particles
        apply_spring_back(p.target_positions, p.base_positions, p.count)
        index, _ = find_nearest_particle(
            p.current_positions, p.count, hand.world_position, scene.select_distance
        )
        p.selected_index = index if index != NOT_FOUND else None

    def reset(self) -> None:
        pass
