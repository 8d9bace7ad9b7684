"""
Pure geometric utility functions.
No imports from the rest of the project — safe to use anywhere.
"""
from __future__ import annotations
import math
from typing import Sequence, Tuple

Point3D = Tuple[float, float, float]

# MediaPipe hand landmark indices
WRIST      = 0
THUMB_TIP  = 4
INDEX_MCP  = 5
INDEX_TIP  = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
RING_MCP   = 13
RING_TIP   = 16
PINKY_MCP  = 17
PINKY_TIP  = 20

NUM_LANDMARKS = 21


def dist(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points; a missing z counts as 0."""
    dz = (a[2] if len(a) > 2 else 0.0) - (b[2] if len(b) > 2 else 0.0)
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + dz * dz)


def palm_center(landmarks: Sequence[Sequence[float]]) -> Point3D:
    """
    Midpoint between the wrist and the middle-finger MCP.
    Returns the origin for absent or short landmark lists.
    """
    if landmarks is None or len(landmarks) < NUM_LANDMARKS:
        return (0.0, 0.0, 0.0)
    w, m = landmarks[WRIST], landmarks[MIDDLE_MCP]
    wz = w[2] if len(w) > 2 else 0.0
    mz = m[2] if len(m) > 2 else 0.0
    return ((w[0] + m[0]) / 2, (w[1] + m[1]) / 2, (wz + mz) / 2)


def fibonacci_sphere_point(index: int, total: int, radius: float) -> Point3D:
    """
    index-th of `total` points spread evenly over a sphere with the
    golden-angle spiral.
    """
    golden_angle = math.pi * (3 - math.sqrt(5))
    phi = math.acos(1 - 2 * (index + 0.5) / total)
    theta = golden_angle * index
    return (
        radius * math.sin(phi) * math.cos(theta),
        radius * math.sin(phi) * math.sin(theta),
        radius * math.cos(phi),
    )


def hex_to_rgb(color: str) -> Tuple[float, float, float]:
    """'#rrggbb' → floats in [0, 1]."""
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
