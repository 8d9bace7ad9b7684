"""
RestInteraction — no active gesture: particles spring home, selection
clears and colours ease back.
"""
from __future__ import annotations

from core.physics import apply_spring_back, lerp_toward
from core.scene import SceneState
from domain.models import HandState
from interactions.base import Interaction
from utils.constants import RESTORE_RATE


class RestInteraction(Interaction):
    NAME = "REST"

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        p = scene.particles
        apply_spring_back(p.target_positions, p.base_positions, p.count)
        p.selected_index = None
        p.highlighted_category = None
        if scene.base_colors.size == p.colors.size:
            lerp_toward(p.colors, scene.base_colors, RESTORE_RATE)

    def reset(self) -> None:
        pass
