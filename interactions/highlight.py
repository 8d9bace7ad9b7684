"""
HighlightInteraction — pointing at a particle brightens its whole
category and dims everything else.
"""
from __future__ import annotations

from core.physics import NOT_FOUND, apply_spring_back, find_nearest_particle, highlight_category
from core.scene import SceneState
from domain.models import HandState
from interactions.base import Interaction


class HighlightInteraction(Interaction):
    NAME = "HIGHLIGHT"

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        p = scene.particles
        apply_spring_back(p.target_positions, p.base_positions, p.count)

        index, _ = find_nearest_particle(
            p.current_positions, p.count, hand.world_position, scene.select_distance * 2
        )
        if index == NOT_FOUND or scene.category_indices.size < p.count:
            return

        category = int(scene.category_indices[index])
        p.highlighted_category = category
        highlight_category(p.colors, scene.base_colors, scene.category_indices, category, p.count)

    def reset(self) -> None:
        pass
