"""
GestureStabilizer — temporal filter that turns noisy per-frame
classifications into a confirmed gesture.

A new gesture is adopted only when every sample in the window agrees,
so single-frame misclassifications never reach the interaction layer.
"""
from __future__ import annotations
from collections import deque
from typing import Deque, Tuple

from domain.enums import Gesture


class GestureStabilizer:
    """
    Parameters
    ----------
    window : int
        Number of raw classifications kept in the rolling buffer.
    """

    def __init__(self, window: int = 3) -> None:
        self._window = window
        self._buffer: Deque[Gesture] = deque(maxlen=window)
        self._current: Gesture = Gesture.NONE

    # ------------------------------------------------------------------
    def update(self, raw: Gesture) -> Tuple[Gesture, float]:
        """
        Feed a raw classification; return (confirmed gesture, confidence).

        Confidence is the share of buffered samples that match the
        confirmed gesture.
        """
        self._buffer.append(raw)

        if len(self._buffer) >= self._window and all(g == raw for g in self._buffer):
            self._current = raw

        matches = sum(1 for g in self._buffer if g == self._current)
        return self._current, matches / max(len(self._buffer), 1)

    @property
    def current(self) -> Gesture:
        return self._current

    @property
    def buffer(self) -> Tuple[Gesture, ...]:
        return tuple(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._current = Gesture.NONE
