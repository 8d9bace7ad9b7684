"""
OpenCVUI — debug view: particles projected through the scene camera,
edges, the hand cursor and a gesture HUD.

The simulation never calls cv2 directly — it delegates to this class.
"""
from __future__ import annotations

import cv2
import numpy as np

from core.hand_mapping import CameraProjection
from core.simulation import Simulation
from domain.enums import Gesture, TopologyMode
from utils.constants import EMISSIVE_MULTIPLIER

_GESTURE_COLORS = {
    Gesture.OPEN_HAND:   (0,   255,   0),
    Gesture.FIST:        (0,     0, 255),
    Gesture.PINCH:       (255,   0, 255),
    Gesture.POINT:       (255, 255,   0),
    Gesture.SWIPE_LEFT:  (0,   255, 255),
    Gesture.SWIPE_RIGHT: (0,   255, 255),
    Gesture.NONE:        (128, 128, 128),
}
_DEFAULT_COLOR = (255, 255, 255)


def project(points: np.ndarray, camera: CameraProjection, width: int, height: int) -> np.ndarray:
    """(n, 3) world points → (n, 2) pixel coordinates."""
    homo = np.hstack([points, np.ones((points.shape[0], 1))])
    clip = (camera.projection @ camera.view @ homo.T).T
    w = np.where(np.abs(clip[:, 3]) < 1e-9, 1e-9, clip[:, 3])
    ndc = clip[:, :2] / w[:, None]
    px = (ndc[:, 0] + 1) * 0.5 * width
    py = (1 - ndc[:, 1]) * 0.5 * height
    return np.stack([px, py], axis=1).astype(np.int32)


class OpenCVUI:
    """Renders the scene into a window."""

    def __init__(self, width: int = 960, height: int = 720,
                 window_name: str = "Particle Topology") -> None:
        self._w = width
        self._h = height
        self._name = window_name

    def render(self, sim: Simulation) -> None:
        canvas = np.zeros((self._h, self._w, 3), dtype=np.uint8)
        scene, hand = sim.scene, sim.hand
        p = scene.particles
        camera = sim.pipeline.camera

        if p.count:
            pts = project(p.current.astype(np.float64), camera, self._w, self._h)
            for e in scene.topology.edges:
                shade = int(40 + 120 * e.weight)
                cv2.line(canvas, tuple(pts[e.source]), tuple(pts[e.target]),
                         (shade, shade, shade), 1)

            rgb = np.clip(p.colors.reshape(-1, 3) / EMISSIVE_MULTIPLIER, 0, 1)
            for i, (x, y) in enumerate(pts):
                radius = max(1, int(p.sizes[i] * 60 * p.scales[i]))
                b, g, r = (int(c * 255) for c in rgb[i][::-1])
                cv2.circle(canvas, (int(x), int(y)), radius, (b, g, r), -1)

            if scene.topology.mode == TopologyMode.DECENTRALIZED:
                labels = [(c.text, c.position) for c in scene.topology.cluster_labels]
            else:
                labels = sim.category_labels()
            self._draw_labels(canvas, labels, camera)

        if hand.detected:
            cursor = project(np.asarray([hand.world_position], dtype=np.float64),
                             camera, self._w, self._h)[0]
            cv2.circle(canvas, (int(cursor[0]), int(cursor[1])), 12,
                       _GESTURE_COLORS.get(hand.gesture, _DEFAULT_COLOR), 2)

        color = _GESTURE_COLORS.get(hand.gesture, _DEFAULT_COLOR)
        cv2.putText(canvas, f"Gesture: {hand.gesture.value} ({hand.confidence * 100:.0f}%)",
                    (20, 40), cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2)
        cv2.putText(canvas, f"Topology: {scene.topology.mode.value}",
                    (20, 70), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (200, 200, 200), 1)
        if p.selected_index is not None:
            cv2.putText(canvas, f"Selected: #{p.selected_index}",
                        (20, 100), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (200, 200, 200), 1)
        cv2.putText(canvas, "1/2/3 topology  ESC quit",
                    (self._w - 260, self._h - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        cv2.imshow(self._name, canvas)

    def _draw_labels(self, canvas: np.ndarray, labels, camera: CameraProjection) -> None:
        if not labels:
            return
        anchors = project(np.asarray([pos for _, pos in labels], dtype=np.float64),
                          camera, self._w, self._h)
        for (text, _), (x, y) in zip(labels, anchors):
            cv2.putText(canvas, text, (int(x), int(y)),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, (230, 230, 230), 1)

    def poll_key(self) -> int:
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        cv2.destroyAllWindows()
