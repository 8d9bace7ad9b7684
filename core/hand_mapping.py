"""
Hand → world mapping: unproject a normalized webcam position through
the scene camera and intersect the ray with the z = 0 plane.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from utils.constants import CAMERA_FOV, CAMERA_POSITION, WEBCAM_HEIGHT, WEBCAM_WIDTH

_PLANE_NORMAL = np.array([0.0, 0.0, 1.0])
_PARALLEL_EPS = 1e-6


def perspective_matrix(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL-style right-handed perspective projection."""
    f = 1.0 / math.tan(math.radians(fov_deg) / 2)
    return np.array([
        [f / aspect, 0.0, 0.0, 0.0],
        [0.0, f, 0.0, 0.0],
        [0.0, 0.0, (far + near) / (near - far), 2 * far * near / (near - far)],
        [0.0, 0.0, -1.0, 0.0],
    ])


def look_at_matrix(eye: Sequence[float], target: Sequence[float],
                   up: Sequence[float] = (0.0, 1.0, 0.0)) -> np.ndarray:
    """World → camera (view) matrix."""
    eye = np.asarray(eye, dtype=np.float64)
    forward = np.asarray(target, dtype=np.float64) - eye
    forward /= np.linalg.norm(forward)
    right = np.cross(forward, up)
    right /= np.linalg.norm(right)
    true_up = np.cross(right, forward)

    view = np.identity(4)
    view[0, :3] = right
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[:3, 3] = -view[:3, :3] @ eye
    return view


@dataclass
class CameraProjection:
    """
    Scene camera as seen by the mapper: position plus view and
    projection matrices (4×4, column-vector convention).
    """
    position: np.ndarray
    view: np.ndarray
    projection: np.ndarray

    @classmethod
    def perspective(
        cls,
        position: Sequence[float] = CAMERA_POSITION,
        target: Sequence[float] = (0.0, 0.0, 0.0),
        fov: float = CAMERA_FOV,
        aspect: float = WEBCAM_WIDTH / WEBCAM_HEIGHT,
        near: float = 0.1,
        far: float = 100.0,
    ) -> "CameraProjection":
        return cls(
            position=np.asarray(position, dtype=np.float64),
            view=look_at_matrix(position, target),
            projection=perspective_matrix(fov, aspect, near, far),
        )

    def unproject(self, ndc: Sequence[float]) -> np.ndarray:
        """NDC point → world point."""
        inverse = np.linalg.inv(self.projection @ self.view)
        p = inverse @ np.array([ndc[0], ndc[1], ndc[2], 1.0])
        return p[:3] / p[3]


def hand_to_world(normalized_x: float, normalized_y: float,
                  camera: CameraProjection) -> Tuple[float, float, float]:
    """
    Map a MediaPipe normalized position ((0, 0) = top-left) to the point
    on the z = 0 plane under it. X is mirrored (webcam), Y is flipped
    (image space grows downward).
    """
    ndc = (-(normalized_x * 2 - 1), -(normalized_y * 2 - 1), 0.5)
    on_ray = camera.unproject(ndc)

    origin = np.asarray(camera.position, dtype=np.float64)
    direction = on_ray - origin
    length = np.linalg.norm(direction)
    if length < _PARALLEL_EPS:
        return (0.0, 0.0, 0.0)
    direction /= length

    denom = float(direction @ _PLANE_NORMAL)
    if abs(denom) < _PARALLEL_EPS:
        return (0.0, 0.0, 0.0)

    t = -float(origin @ _PLANE_NORMAL) / denom
    hit = origin + direction * t
    return (float(hit[0]), float(hit[1]), float(hit[2]))
