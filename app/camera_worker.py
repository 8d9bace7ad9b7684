"""
CameraWorker — runs camera capture + hand landmark detection in a QThread
and writes each result into the shared LandmarkSlot.

The render loop never waits on this thread; it reads whatever snapshot
the slot holds at the start of each frame.
"""
from __future__ import annotations
import logging
import time
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from core.camera import Camera
from core.hand_tracker import HandTracker
from core.landmark_slot import LandmarkSlot
from domain.errors import HandTrackingError

logger = logging.getLogger(__name__)


class CameraWorker(QThread):
    """
    Signals:
        hand_changed — True/False when the hand appears / disappears
        error        — acquisition or detection-loop failure (tracking unavailable)
        status_msg   — human readable lifecycle messages
    """

    hand_changed = pyqtSignal(bool)
    error        = pyqtSignal(str)
    status_msg   = pyqtSignal(str)

    def __init__(self, config: AppConfig, slot: LandmarkSlot, parent=None) -> None:
        super().__init__(parent)
        self._config = config
        self._slot = slot
        self._running = False

        # Created in run() so they live on the worker thread
        self._camera:  Optional[Camera]      = None
        self._tracker: Optional[HandTracker] = None
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Main loop — runs on the worker thread."""
        try:
            self._acquire()
        except HandTrackingError as exc:
            self.last_error = str(exc)
            logger.error("Hand tracking unavailable: %s", exc)
            self._cleanup()
            self.error.emit(self.last_error)
            return

        self._running = True
        had_hand = False
        self.status_msg.emit("Hand tracking started")
        logger.info("Hand tracking started")

        try:
            while self._running:
                if not self._camera.due():
                    time.sleep(0.002)
                    continue

                frame = self._camera.read()
                if frame is None:
                    logger.warning("Empty camera frame, retrying")
                    time.sleep(0.05)
                    continue

                now = time.monotonic()
                try:
                    landmarks = self._tracker.process(frame, now)
                except RuntimeError as exc:
                    logger.warning("Detection frame error: %s", exc)
                    continue

                self._slot.write(landmarks, now)
                if (landmarks is not None) != had_hand:
                    had_hand = landmarks is not None
                    self.hand_changed.emit(had_hand)
        except Exception as exc:
            self.last_error = f"Hand tracking stopped: {exc}"
            logger.exception("Hand tracking loop failed")
            self.error.emit(self.last_error)
        finally:
            self._running = False
            self._cleanup()

    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Halt the loop, release camera + detector, leave the slot empty."""
        self._running = False
        self.wait(3000)
        self._slot.clear()

    def _acquire(self) -> None:
        cfg = self._config
        try:
            self._tracker = HandTracker(
                cfg.model_path,
                min_detection_confidence=cfg.min_detection_confidence,
                min_tracking_confidence=cfg.min_tracking_confidence,
            )
            self._camera = Camera(cfg.camera_device, cfg.fps_limit)
        except (RuntimeError, FileNotFoundError, ValueError) as exc:
            raise HandTrackingError(f"Hand tracking failed: {exc}") from exc

    def _cleanup(self) -> None:
        if self._camera is not None:
            self._camera.release()
            self._camera = None
        if self._tracker is not None:
            self._tracker.release()
            self._tracker = None
        self._slot.clear()
        self.status_msg.emit("Hand tracking stopped")
        logger.info("Hand tracking stopped")
