"""
Particle physics — pure functions over caller-owned flat buffers.

Every function mutates the buffers it is given in place; positions are
flat float32 arrays with 3 values per particle.
"""
from __future__ import annotations
import math
from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from domain.models import Vec3
from utils.constants import (
    DAMP_LAMBDA,
    DIM_GAIN,
    HIGHLIGHT_GAIN,
    HIGHLIGHT_RATE,
    REPEL_MIN_DIST,
    REPEL_RADIUS,
    REPEL_STRENGTH,
    SCALE_FADE_RATE,
)

NOT_FOUND = -1


def _xyz(buffer: np.ndarray, count: int) -> np.ndarray:
    return buffer[: count * 3].reshape(count, 3)


def repel_force(distance, radius: float = REPEL_RADIUS, strength: float = REPEL_STRENGTH):
    """Linear falloff: `strength` at the centre, 0 at `radius` and beyond."""
    return strength * np.clip(1.0 - np.asarray(distance) / radius, 0.0, None)


def apply_repel(
    current_positions: np.ndarray,
    target_positions: np.ndarray,
    base_positions: np.ndarray,
    point: Sequence[float],
    count: int,
    radius: float = REPEL_RADIUS,
    strength: float = REPEL_STRENGTH,
) -> None:
    """
    Push particles within `radius` of `point` outward from their current
    position; everything else springs back to its base position.
    """
    if count == 0:
        return
    current = _xyz(current_positions, count)
    target = _xyz(target_positions, count)
    base = _xyz(base_positions, count)

    offset = current - np.asarray(point, dtype=np.float32)
    distance = np.linalg.norm(offset, axis=1)
    inside = distance < radius

    target[~inside] = base[~inside]
    if not inside.any():
        return

    d = distance[inside]
    direction = np.empty((d.size, 3), dtype=np.float32)
    degenerate = d < REPEL_MIN_DIST
    direction[~degenerate] = offset[inside][~degenerate] / d[~degenerate, None]
    direction[degenerate] = (0.0, 0.0, 1.0)

    force = repel_force(d, radius, strength)
    target[inside] = current[inside] + direction * force[:, None]


def apply_collapse(
    target_positions: np.ndarray,
    count: int,
    centroids: Optional[Mapping[int, Vec3]] = None,
    category_indices: Optional[np.ndarray] = None,
) -> None:
    """Send every particle to its category centroid, or to the origin."""
    if count == 0:
        return
    target = _xyz(target_positions, count)
    target[:] = 0.0
    if not centroids or category_indices is None:
        return
    cats = np.asarray(category_indices)[:count]
    for cat, c in centroids.items():
        target[cats == cat] = c


def apply_spring_back(target_positions: np.ndarray, base_positions: np.ndarray, count: int) -> None:
    target_positions[: count * 3] = base_positions[: count * 3]


def damp_positions(
    current_positions: np.ndarray,
    target_positions: np.ndarray,
    count: int,
    delta: float,
    rate: float = DAMP_LAMBDA,
) -> None:
    """
    Frame-rate independent exponential approach:
    current += (target - current) * (1 - e^(-rate * delta))
    """
    if count == 0 or delta <= 0:
        return
    factor = np.float32(1.0 - math.exp(-rate * delta))
    n = count * 3
    current_positions[:n] += (target_positions[:n] - current_positions[:n]) * factor


def find_nearest_particle(
    positions: np.ndarray,
    count: int,
    point: Sequence[float],
    max_distance: float,
) -> Tuple[int, float]:
    """(index, distance) of the closest particle within max_distance, else (-1, max_distance)."""
    if count == 0:
        return NOT_FOUND, max_distance
    d2 = np.sum((_xyz(positions, count) - np.asarray(point, dtype=np.float32)) ** 2, axis=1)
    best = int(np.argmin(d2))
    if d2[best] >= max_distance * max_distance:
        return NOT_FOUND, max_distance
    return best, math.sqrt(float(d2[best]))


def compute_centroids(
    base_positions: np.ndarray,
    category_indices: np.ndarray,
    count: int,
) -> Dict[int, Vec3]:
    """Mean base position per category index."""
    if count == 0:
        return {}
    cats = np.asarray(category_indices[:count], dtype=np.int64)
    keys, inverse, sizes = np.unique(cats, return_inverse=True, return_counts=True)
    sums = np.zeros((keys.size, 3), dtype=np.float64)
    np.add.at(sums, inverse, _xyz(base_positions, count))
    means = sums / sizes[:, None]
    return {int(k): tuple(float(v) for v in m) for k, m in zip(keys, means)}


# ---- colour / visibility feedback ------------------------------------
def lerp_toward(values: np.ndarray, goal: np.ndarray, rate: float) -> None:
    values += (goal - values) * np.float32(rate)


def highlight_category(
    colors: np.ndarray,
    base_colors: np.ndarray,
    category_indices: np.ndarray,
    category: int,
    count: int,
    rate: float = HIGHLIGHT_RATE,
) -> None:
    """Brighten particles of `category`, dim the rest."""
    gain = np.where(np.asarray(category_indices[:count]) == category, HIGHLIGHT_GAIN, DIM_GAIN)
    goal = _xyz(base_colors, count) * gain[:, None].astype(np.float32)
    lerp_toward(_xyz(colors, count), goal, rate)


def fade_scales(scales: np.ndarray, visible: np.ndarray, rate: float = SCALE_FADE_RATE) -> None:
    """Ease per-particle visibility multipliers toward 1 (shown) or 0 (hidden)."""
    lerp_toward(scales, np.asarray(visible, dtype=np.float32), rate)
