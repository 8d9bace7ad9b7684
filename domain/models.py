from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from domain.enums import Gesture

# Type aliases
Landmark3D = Tuple[float, float, float]
LandmarkFrame = Sequence[Sequence[float]]   # 21 × (x, y, z), x/y normalized 0–1
Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class GestureResult:
    """Output of one classifier invocation."""
    gesture: Gesture = Gesture.NONE
    confidence: float = 0.0


@dataclass
class HandState:
    """
    Everything the rest of the frame needs to know about the hand.
    Rebuilt once per rendered frame by the hand pipeline.
    """
    detected: bool = False
    gesture: Gesture = Gesture.NONE
    confidence: float = 0.0
    smoothed_position: Vec3 = (0.0, 0.0, 0.0)
    world_position: Vec3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class GraphEdge:
    """Undirected edge, source < target by convention."""
    source: int
    target: int
    weight: float

    @staticmethod
    def between(a: int, b: int, weight: float) -> "GraphEdge":
        return GraphEdge(min(a, b), max(a, b), weight)

    @property
    def key(self) -> Tuple[int, int]:
        return (self.source, self.target)


@dataclass(frozen=True)
class ClusterLabel:
    text: str
    position: Vec3
    color: str


@dataclass(frozen=True)
class EdgeLabel:
    source: int
    target: int
    text: str


@dataclass
class LayoutResult:
    """
    Output of a topology layout.

    `node_clusters` and `cluster_centers` are only filled by the
    decentralized layout; `hub_index` only by the centralized one.
    """
    positions: np.ndarray
    edges: List[GraphEdge] = field(default_factory=list)
    hub_index: Optional[int] = None
    cluster_labels: List[ClusterLabel] = field(default_factory=list)
    edge_labels: List[EdgeLabel] = field(default_factory=list)
    node_clusters: Optional[np.ndarray] = None
    cluster_centers: Dict[int, Vec3] = field(default_factory=dict)
