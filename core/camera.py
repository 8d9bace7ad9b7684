"""
Camera — thin wrapper around OpenCV VideoCapture with FPS limiting.
No ML, no gesture logic.
"""
from __future__ import annotations
import time
from typing import Callable, Optional

import cv2
import numpy as np

from utils.constants import HAND_TRACKING_FPS, WEBCAM_HEIGHT, WEBCAM_WIDTH


class Camera:
    """
    Parameters
    ----------
    device : int
        Camera index (0 = default webcam).
    fps_limit : int
        Maximum frames per second handed to the detector.
    """

    def __init__(
        self,
        device: int = 0,
        fps_limit: int = HAND_TRACKING_FPS,
        width: int = WEBCAM_WIDTH,
        height: int = WEBCAM_HEIGHT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cap = cv2.VideoCapture(device)
        self._frame_time = 1.0 / fps_limit
        self._prev_time: Optional[float] = None
        self._clock = clock

        if not self._cap.isOpened():
            self._cap.release()
            raise RuntimeError(f"Cannot open camera device {device}")
        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

    # ------------------------------------------------------------------
    def due(self) -> bool:
        """True once at least one frame interval passed since the last read()."""
        return self._prev_time is None or self._clock() - self._prev_time >= self._frame_time

    def read(self) -> Optional[np.ndarray]:
        """Grab the next frame (BGR). Returns None on read failure."""
        self._prev_time = self._clock()
        ret, frame = self._cap.read()
        return frame if ret else None

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()
