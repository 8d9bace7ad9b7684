"""
TopologySwipeInteraction — a swipe cycles the topology mode.

SwipeRight advances (centralized → decentralized → distributed →
centralized), SwipeLeft goes back. The classifier only reports a swipe
for a single frame, so apply() runs once per swipe.
"""
from __future__ import annotations

from core.scene import SceneState
from domain.enums import Gesture
from domain.models import HandState
from interactions.base import Interaction


class TopologySwipeInteraction(Interaction):
    NAME = "TOPOLOGY_SWIPE"

    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        if scene.count == 0:
            return
        step = 1 if hand.gesture == Gesture.SWIPE_RIGHT else -1
        scene.topology.cycle(step, now)
        scene.sync_base_colors()

    def reset(self) -> None:
        pass
