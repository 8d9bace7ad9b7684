"""
GestureClassifier — rule-based hand pose classification on 21-point
landmark frames, debounced by a GestureStabilizer, with a palm-velocity
swipe detector layered on top.
"""
from __future__ import annotations
import logging
import time
from collections import deque
from typing import Callable, Deque, Optional, Tuple

from core.cooldown_manager import CooldownManager
from core.state_stabilizer import GestureStabilizer
from domain.enums import Gesture
from domain.models import GestureResult, LandmarkFrame
from utils.constants import (
    FIST_CURL_THRESHOLD,
    GESTURE_DEBOUNCE_FRAMES,
    PALM_HISTORY_LEN,
    PINCH_DISTANCE,
    POINT_EXTEND_THRESHOLD,
    SWIPE_CONFIDENCE,
    SWIPE_COOLDOWN,
    SWIPE_SAMPLES,
    SWIPE_VELOCITY_THRESHOLD,
    SWIPE_VERTICAL_RATIO,
)
from utils.geometry import (
    INDEX_MCP, INDEX_TIP, MIDDLE_MCP, MIDDLE_TIP, NUM_LANDMARKS,
    PINKY_MCP, PINKY_TIP, RING_MCP, RING_TIP, THUMB_TIP,
    dist, palm_center,
)

logger = logging.getLogger(__name__)

# (tip, mcp) for index, middle, ring, pinky
FINGERS = (
    (INDEX_TIP, INDEX_MCP),
    (MIDDLE_TIP, MIDDLE_MCP),
    (RING_TIP, RING_MCP),
    (PINKY_TIP, PINKY_MCP),
)

_SWIPE = "SWIPE"


def is_valid_frame(landmarks: Optional[LandmarkFrame]) -> bool:
    return landmarks is not None and len(landmarks) >= NUM_LANDMARKS


def classify_raw(
    landmarks: Optional[LandmarkFrame],
    pinch_distance: float = PINCH_DISTANCE,
    curl_threshold: float = FIST_CURL_THRESHOLD,
    extend_threshold: float = POINT_EXTEND_THRESHOLD,
) -> Gesture:
    """Single-frame classification, no history."""
    if not is_valid_frame(landmarks):
        return Gesture.NONE

    if dist(landmarks[THUMB_TIP], landmarks[INDEX_TIP]) < pinch_distance:
        return Gesture.PINCH

    spans = [dist(landmarks[tip], landmarks[mcp]) for tip, mcp in FINGERS]
    extended = [s > extend_threshold for s in spans]
    curled = [s < curl_threshold for s in spans]

    if all(curled):
        return Gesture.FIST
    if extended[0] and not any(extended[1:]):
        return Gesture.POINT
    if all(extended):
        return Gesture.OPEN_HAND
    return Gesture.NONE


class GestureClassifier:
    """
    Stateful classifier: one call per landmark frame.

    Parameters
    ----------
    debounce_frames : int
        Raw samples that must agree before a gesture is confirmed.
    swipe_threshold : float
        Minimum horizontal palm speed (normalized units / s) for a swipe.
    swipe_cooldown : float
        Seconds during which a second swipe is suppressed.
    clock : callable
        Timestamp source used when classify() gets no timestamp.
    """

    def __init__(
        self,
        debounce_frames: int = GESTURE_DEBOUNCE_FRAMES,
        pinch_distance: float = PINCH_DISTANCE,
        curl_threshold: float = FIST_CURL_THRESHOLD,
        extend_threshold: float = POINT_EXTEND_THRESHOLD,
        swipe_threshold: float = SWIPE_VELOCITY_THRESHOLD,
        swipe_cooldown: float = SWIPE_COOLDOWN,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._pinch_distance = pinch_distance
        self._curl_threshold = curl_threshold
        self._extend_threshold = extend_threshold
        self._swipe_threshold = swipe_threshold
        self._clock = clock

        self._stabilizer = GestureStabilizer(window=debounce_frames)
        self._palm_history: Deque[Tuple[float, float, float]] = deque(maxlen=PALM_HISTORY_LEN)
        self._cooldown = CooldownManager(default_cooldown=swipe_cooldown, clock=clock)

    # ------------------------------------------------------------------
    def classify(self, landmarks: Optional[LandmarkFrame],
                 timestamp: Optional[float] = None) -> GestureResult:
        """
        Parameters
        ----------
        landmarks : sequence of 21 (x, y, z) points, or None
        timestamp : float, optional
            Seconds; defaults to the injected clock.
        """
        now = self._clock() if timestamp is None else timestamp

        if not is_valid_frame(landmarks):
            self._stabilizer.update(Gesture.NONE)
            return GestureResult(Gesture.NONE, 0.0)

        raw = classify_raw(
            landmarks, self._pinch_distance, self._curl_threshold, self._extend_threshold
        )

        px, py, _ = palm_center(landmarks)
        self._palm_history.append((px, py, now))

        gesture, confidence = self._stabilizer.update(raw)

        if raw == Gesture.OPEN_HAND and len(self._palm_history) >= SWIPE_SAMPLES:
            swipe = self._detect_swipe(now)
            if swipe is not None:
                logger.debug("Swipe detected: %s", swipe.value)
                return GestureResult(swipe, SWIPE_CONFIDENCE)

        return GestureResult(gesture, confidence)

    # ------------------------------------------------------------------
    def _detect_swipe(self, now: float) -> Optional[Gesture]:
        if not self._cooldown.ready(_SWIPE, now):
            return None

        x0, y0, t0 = self._palm_history[-SWIPE_SAMPLES]
        x1, y1, t1 = self._palm_history[-1]
        dt = t1 - t0
        if dt <= 0:
            return None

        vx = (x1 - x0) / dt
        vy = (y1 - y0) / dt
        if abs(vx) < self._swipe_threshold or abs(vy) > abs(vx) * SWIPE_VERTICAL_RATIO:
            return None

        self._cooldown.ok(_SWIPE, now)
        self._palm_history.clear()
        # Mirrored camera: moving toward image-left reads as a swipe right.
        return Gesture.SWIPE_RIGHT if vx < 0 else Gesture.SWIPE_LEFT

    @property
    def current(self) -> Gesture:
        return self._stabilizer.current

    @property
    def buffer(self) -> Tuple[Gesture, ...]:
        return self._stabilizer.buffer

    def reset(self) -> None:
        self._stabilizer.reset()
        self._palm_history.clear()
        self._cooldown.reset_all()
