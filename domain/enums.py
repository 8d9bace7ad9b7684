from enum import Enum


class Gesture(str, Enum):
    """Discrete gestures reported by the classifier."""
    NONE        = "None"
    OPEN_HAND   = "OpenHand"
    PINCH       = "Pinch"
    FIST        = "Fist"
    POINT       = "Point"
    SWIPE_LEFT  = "SwipeLeft"
    SWIPE_RIGHT = "SwipeRight"

    @property
    def is_swipe(self) -> bool:
        return self in (Gesture.SWIPE_LEFT, Gesture.SWIPE_RIGHT)


class TopologyMode(str, Enum):
    """Global layout / edge strategies. Cycles in declaration order."""
    CENTRALIZED   = "centralized"
    DECENTRALIZED = "decentralized"
    DISTRIBUTED   = "distributed"

    def step(self, offset: int) -> "TopologyMode":
        members = list(TopologyMode)
        return members[(members.index(self) + offset) % len(members)]

    def next(self) -> "TopologyMode":
        return self.step(1)

    def previous(self) -> "TopologyMode":
        return self.step(-1)
