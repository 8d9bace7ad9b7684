from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from utils import constants as C


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.
    Defaults mirror utils/constants.py.
    """
    # ---- paths ---------------------------------------------------------
    model_path: Path = Path("models/hand_landmarker.task")

    # ---- camera / tracking ---------------------------------------------
    camera_device: int = 0
    fps_limit: int = C.HAND_TRACKING_FPS
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ---- one-euro filter -----------------------------------------------
    filter_min_cutoff: float = C.ONE_EURO_MIN_CUTOFF
    filter_beta: float = C.ONE_EURO_BETA
    filter_d_cutoff: float = C.ONE_EURO_D_CUTOFF

    # ---- classifier ----------------------------------------------------
    debounce_frames: int = C.GESTURE_DEBOUNCE_FRAMES
    pinch_distance: float = C.PINCH_DISTANCE
    curl_threshold: float = C.FIST_CURL_THRESHOLD
    extend_threshold: float = C.POINT_EXTEND_THRESHOLD
    swipe_threshold: float = C.SWIPE_VELOCITY_THRESHOLD
    swipe_cooldown: float = C.SWIPE_COOLDOWN

    # ---- physics -------------------------------------------------------
    repel_radius: float = C.REPEL_RADIUS
    repel_strength: float = C.REPEL_STRENGTH
    damp_lambda: float = C.DAMP_LAMBDA
    select_distance: float = C.SELECT_DISTANCE

    # ---- topology ------------------------------------------------------
    knn_k: int = C.DISTRIBUTED_K
    topology_transition: float = C.TOPOLOGY_TRANSITION

    # ---- data ----------------------------------------------------------
    placeholder_particles: int = 300


# Default singleton: import and use directly, or override in tests.
default_config = AppConfig()
