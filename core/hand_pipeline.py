"""
HandPipeline — landmarks → HandState.

    landmarks → GestureClassifier ─────────────┐
              → palm centre → OneEuroFilter3D → hand_to_world → HandState
"""
from __future__ import annotations
from typing import Optional

from core.gesture_classifier import GestureClassifier, is_valid_frame
from core.hand_mapping import CameraProjection, hand_to_world
from core.one_euro import OneEuroFilter3D
from domain.models import HandState, LandmarkFrame
from utils.geometry import palm_center


class HandPipeline:
    """
    Parameters
    ----------
    camera : CameraProjection
        Scene camera used for unprojection.
    classifier, smoother : optional
        Injected for tests; defaults built from constants.
    """

    def __init__(
        self,
        camera: Optional[CameraProjection] = None,
        classifier: Optional[GestureClassifier] = None,
        smoother: Optional[OneEuroFilter3D] = None,
    ) -> None:
        self.camera = camera or CameraProjection.perspective()
        self.classifier = classifier or GestureClassifier()
        self.smoother = smoother or OneEuroFilter3D()
        self._state = HandState()

    def update(self, landmarks: Optional[LandmarkFrame], now: float) -> HandState:
        result = self.classifier.classify(landmarks, now)

        if not is_valid_frame(landmarks):
            # keep the last known cursor position, drop everything else
            self._state = HandState(
                detected=False,
                smoothed_position=self._state.smoothed_position,
                world_position=self._state.world_position,
            )
            return self._state

        px, py, pz = palm_center(landmarks)
        smoothed = self.smoother.filter(px, py, pz, now)
        world = hand_to_world(smoothed[0], smoothed[1], self.camera)

        self._state = HandState(
            detected=True,
            gesture=result.gesture,
            confidence=result.confidence,
            smoothed_position=smoothed,
            world_position=world,
        )
        return self._state

    @property
    def state(self) -> HandState:
        return self._state

    def reset(self) -> None:
        self.classifier.reset()
        self.smoother.reset()
        self._state = HandState()
