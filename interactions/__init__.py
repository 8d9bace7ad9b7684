"""
Gesture interactions — one transform per gesture behaviour
"""

from .base import Interaction
from .repel import RepelInteraction
from .collapse import CollapseInteraction
from .select import SelectInteraction
from .highlight import HighlightInteraction
from .rest import RestInteraction
from .swipe import TopologySwipeInteraction

__all__ = [
    'Interaction',
    'RepelInteraction',
    'CollapseInteraction',
    'SelectInteraction',
    'HighlightInteraction',
    'RestInteraction',
    'TopologySwipeInteraction',
]
