"""
CooldownManager — centralises cooldown timestamps so callers don't
track time themselves. The clock is injectable for tests.
"""
from __future__ import annotations
import time
from typing import Callable, Dict, Optional


class CooldownManager:
    """
    Per-event cooldown tracker.

    Usage
    -----
    cm = CooldownManager(default_cooldown=1.5)
    if cm.ok("SWIPE", now=t):
        ...  # emit the swipe
    """

    def __init__(
        self,
        default_cooldown: float = 0.6,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default = default_cooldown
        self._clock = clock
        self._last: Dict[str, float] = {}

    def ready(self, name: str, now: Optional[float] = None,
              cooldown: Optional[float] = None) -> bool:
        """True if the cooldown has elapsed (does not record anything)."""
        now = self._clock() if now is None else now
        threshold = cooldown if cooldown is not None else self._default
        last = self._last.get(name)
        return last is None or now - last >= threshold

    def ok(self, name: str, now: Optional[float] = None,
           cooldown: Optional[float] = None) -> bool:
        """Like ready(), but an accepted event starts a new cooldown window."""
        now = self._clock() if now is None else now
        if self.ready(name, now, cooldown):
            self._last[name] = now
            return True
        return False

    def reset(self, name: str) -> None:
        """Forget the last accepted `name` event."""
        self._last.pop(name, None)

    def reset_all(self) -> None:
        self._last.clear()
