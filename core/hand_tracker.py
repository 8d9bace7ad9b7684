"""
HandTracker — encapsulates all MediaPipe logic.
The rest of the application never imports mediapipe directly.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, List, Optional

import cv2
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from domain.models import Landmark3D


class HandTracker:
    """
    Runs the MediaPipe HandLandmarker in VIDEO mode and returns the first
    detected hand as 21 normalized (x, y, z) points.

    Parameters
    ----------
    model_path : Path
        hand_landmarker.task model bundle.
    min_detection_confidence : float
    min_tracking_confidence : float
    """

    def __init__(
        self,
        model_path: Path,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ) -> None:
        model_path = Path(model_path)
        if not model_path.exists():
            raise FileNotFoundError(f"Missing model file: {model_path}")

        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._landmarker = vision.HandLandmarker.create_from_options(options)
        self._start: Optional[float] = None
        self._last_ms = -1

    # ------------------------------------------------------------------
    def process(self, frame: Any, timestamp: float) -> Optional[List[Landmark3D]]:
        """
        Parameters
        ----------
        frame : np.ndarray
            BGR frame from OpenCV.
        timestamp : float
            Monotonic seconds.

        Returns
        -------
        21 landmarks of the first hand, or None when no hand is visible.
        """
        if self._start is None:
            self._start = timestamp
        # VIDEO mode needs strictly increasing millisecond timestamps
        ms = max(self._last_ms + 1, int((timestamp - self._start) * 1000))
        self._last_ms = ms

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        result = self._landmarker.detect_for_video(image, ms)

        if not result.hand_landmarks:
            return None
        return [(lm.x, lm.y, lm.z) for lm in result.hand_landmarks[0]]

    def release(self) -> None:
        self._landmarker.close()
