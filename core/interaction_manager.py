"""
InteractionManager — maps the confirmed gesture to one interaction per
frame.

Design decisions:
  - The gesture → interaction table is explicit and replaceable.
  - Switching to a different interaction resets the previous one
    (drops e.g. cached collapse centroids).
  - While a topology transition is pending, only swipes are dispatched,
    so the new layout's targets are not overwritten mid-animation.
"""
from __future__ import annotations
import logging
from typing import Dict, Mapping, Optional

from core.scene import SceneState
from domain.enums import Gesture
from domain.models import HandState
from interactions import (
    CollapseInteraction,
    HighlightInteraction,
    Interaction,
    RepelInteraction,
    RestInteraction,
    SelectInteraction,
    TopologySwipeInteraction,
)

logger = logging.getLogger(__name__)


def default_table() -> Dict[Gesture, Interaction]:
    swipe = TopologySwipeInteraction()
    return {
        Gesture.NONE:        RestInteraction(),
        Gesture.OPEN_HAND:   RepelInteraction(),
        Gesture.FIST:        CollapseInteraction(),
        Gesture.PINCH:       SelectInteraction(),
        Gesture.POINT:       HighlightInteraction(),
        Gesture.SWIPE_LEFT:  swipe,
        Gesture.SWIPE_RIGHT: swipe,
    }


class InteractionManager:
    """
    The single entry point for gesture-driven particle updates.

    Usage
    -----
    manager = InteractionManager()
    manager.process(scene, hand, now)
    """

    def __init__(self, table: Optional[Mapping[Gesture, Interaction]] = None) -> None:
        self._table: Dict[Gesture, Interaction] = dict(table or default_table())
        self._fallback = self._table.get(Gesture.NONE) or RestInteraction()
        self._active: Optional[Interaction] = None

    # ------------------------------------------------------------------
    def interaction_for(self, gesture: Gesture) -> Interaction:
        return self._table.get(gesture, self._fallback)

    def process(self, scene: SceneState, hand: HandState, now: float) -> Optional[Interaction]:
        """Apply the interaction for this frame; returns it, or None if suppressed."""
        if scene.count == 0:
            return None
        if scene.topology.transitioning and not hand.gesture.is_swipe:
            return None

        interaction = self.interaction_for(hand.gesture)
        if interaction is not self._active:
            if self._active is not None:
                self._active.reset()
            logger.debug("Interaction → %s", interaction.NAME)
            self._active = interaction

        interaction.apply(scene, hand, now)
        return interaction

    @property
    def active(self) -> Optional[Interaction]:
        return self._active

    def reset_all(self) -> None:
        """Force-reset every interaction (e.g. after the rest layout changed)."""
        for interaction in set(self._table.values()) | {self._fallback}:
            interaction.reset()
        self._active = None
