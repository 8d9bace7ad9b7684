"""
LandmarkSlot — latest landmark frame, written by the tracking thread and
read once per render frame. Readers always get a complete snapshot.
"""
from __future__ import annotations
import threading
from typing import Optional, Tuple

from domain.models import Landmark3D, LandmarkFrame

Snapshot = Tuple[Landmark3D, ...]


class LandmarkSlot:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frame: Optional[Snapshot] = None
        self._timestamp: float = 0.0

    def write(self, landmarks: Optional[LandmarkFrame], timestamp: float) -> None:
        snapshot = None
        if landmarks is not None:
            snapshot = tuple((float(p[0]), float(p[1]), float(p[2]) if len(p) > 2 else 0.0)
                             for p in landmarks)
        with self._lock:
            self._frame = snapshot
            self._timestamp = timestamp

    def read(self) -> Tuple[Optional[Snapshot], float]:
        with self._lock:
            return self._frame, self._timestamp

    def clear(self) -> None:
        self.write(None, 0.0)

    @property
    def hand_detected(self) -> bool:
        with self._lock:
            return self._frame is not None
