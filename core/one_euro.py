"""
One-Euro filter — adaptive low-pass whose cutoff rises with the speed
of the signal (less lag when moving fast, less jitter when still).
"""
from __future__ import annotations
import math
from typing import Optional, Tuple

from utils.constants import ONE_EURO_BETA, ONE_EURO_D_CUTOFF, ONE_EURO_FREQ, ONE_EURO_MIN_CUTOFF


class LowPassFilter:
    def __init__(self) -> None:
        self._y: Optional[float] = None

    def filter(self, value: float, alpha: float) -> float:
        if self._y is None:
            self._y = value
        else:
            self._y = alpha * value + (1 - alpha) * self._y
        return self._y

    def last_value(self) -> float:
        return self._y if self._y is not None else 0.0

    @property
    def initialized(self) -> bool:
        return self._y is not None

    def reset(self) -> None:
        self._y = None


class OneEuroFilter:
    """
    Parameters
    ----------
    freq : float
        Nominal sampling frequency (Hz). Re-estimated from timestamps.
    min_cutoff : float
        Cutoff (Hz) used when the signal is static.
    beta : float
        How strongly speed raises the cutoff.
    d_cutoff : float
        Cutoff (Hz) for the derivative estimate.
    """

    def __init__(
        self,
        freq: float = ONE_EURO_FREQ,
        min_cutoff: float = ONE_EURO_MIN_CUTOFF,
        beta: float = ONE_EURO_BETA,
        d_cutoff: float = ONE_EURO_D_CUTOFF,
    ) -> None:
        self._nominal_freq = freq
        self.freq = freq
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff
        self._x = LowPassFilter()
        self._dx = LowPassFilter()
        self._last_time: Optional[float] = None

    def _alpha(self, cutoff: float) -> float:
        te = 1.0 / self.freq
        tau = 1.0 / (2 * math.pi * cutoff)
        return 1.0 / (1.0 + tau / te)

    def filter(self, value: float, timestamp: Optional[float] = None) -> float:
        if self._last_time is not None and timestamp is not None:
            dt = timestamp - self._last_time
            if dt > 0:
                self.freq = 1.0 / dt
        self._last_time = timestamp

        if not self._x.initialized:
            # Seed both stages: no lag on the first sample.
            self._dx.filter(0.0, 1.0)
            return self._x.filter(value, 1.0)

        dx = (value - self._x.last_value()) * self.freq
        edx = self._dx.filter(dx, self._alpha(self.d_cutoff))
        cutoff = self.min_cutoff + self.beta * abs(edx)
        return self._x.filter(value, self._alpha(cutoff))

    def reset(self) -> None:
        self._x.reset()
        self._dx.reset()
        self._last_time = None
        self.freq = self._nominal_freq


class OneEuroFilter3D:
    """Three independent filters for x / y / z."""

    def __init__(
        self,
        freq: float = ONE_EURO_FREQ,
        min_cutoff: float = ONE_EURO_MIN_CUTOFF,
        beta: float = ONE_EURO_BETA,
        d_cutoff: float = ONE_EURO_D_CUTOFF,
    ) -> None:
        self._filters = tuple(OneEuroFilter(freq, min_cutoff, beta, d_cutoff) for _ in range(3))

    def filter(self, x: float, y: float, z: float,
               timestamp: Optional[float] = None) -> Tuple[float, float, float]:
        fx, fy, fz = self._filters
        return (fx.filter(x, timestamp), fy.filter(y, timestamp), fz.filter(z, timestamp))

    def reset(self) -> None:
        for f in self._filters:
            f.reset()
