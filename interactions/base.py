"""
Abstract base class for all gesture interactions.

Every interaction must:
  - implement apply(scene, hand, now)
  - implement reset()
  - declare its NAME class attribute

Each one is a transform over the particle buffers held by the scene,
which keeps the gesture → behaviour mapping testable in isolation.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

from core.scene import SceneState
from domain.models import HandState


class Interaction(ABC):
    """Base class for all gesture interactions."""

    # Override in subclasses for logging / registration
    NAME: str = "UNNAMED_INTERACTION"

    @abstractmethod
    def apply(self, scene: SceneState, hand: HandState, now: float) -> None:
        """
        Update the scene for one frame while this gesture is active.

        Parameters
        ----------
        scene : SceneState
            Particle buffers, topology and category data.
        hand : HandState
            Gesture, confidence and world position for this frame.
        now : float
            Frame clock in seconds.
        """

    @abstractmethod
    def reset(self) -> None:
        """
        Drop any cached state.
        Called by InteractionManager when the gesture changes or the rest
        layout is replaced.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r}>"
