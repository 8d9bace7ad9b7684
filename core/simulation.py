"""
Simulation — the per-frame control loop.

One call to step() per rendered frame:

    LandmarkSlot → HandPipeline → InteractionManager → damping
                 → visibility fade → topology commit check

No hidden globals: everything the frame touches hangs off this object.
"""
from __future__ import annotations
import logging
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from core.graph import compute_category_centroids
from core.hand_pipeline import HandPipeline
from core.interaction_manager import InteractionManager
from core.landmark_slot import LandmarkSlot
from core.physics import damp_positions, fade_scales
from core.scene import SceneState
from domain.enums import TopologyMode
from domain.models import HandState, Vec3
from domain.table import DataTable
from utils.constants import DAMP_LAMBDA

logger = logging.getLogger(__name__)


class Simulation:
    """
    Parameters
    ----------
    scene : SceneState, optional
    pipeline : HandPipeline, optional
    slot : LandmarkSlot, optional
        Shared with the tracking worker.
    damp_rate : float
        Exponential damping rate (1/s).
    """

    def __init__(
        self,
        scene: Optional[SceneState] = None,
        pipeline: Optional[HandPipeline] = None,
        slot: Optional[LandmarkSlot] = None,
        manager: Optional[InteractionManager] = None,
        damp_rate: float = DAMP_LAMBDA,
    ) -> None:
        self.scene = scene or SceneState.create()
        self.pipeline = pipeline or HandPipeline()
        self.slot = slot or LandmarkSlot()
        self.manager = manager or InteractionManager()
        self._damp_rate = damp_rate
        self.hand = HandState()

    # ---- data ------------------------------------------------------------
    def load(
        self,
        positions: np.ndarray,
        colors: Optional[np.ndarray] = None,
        sizes: Optional[np.ndarray] = None,
        category_indices: Optional[np.ndarray] = None,
        category_names: Sequence[str] = (),
        labels: Optional[Sequence[str]] = None,
    ) -> None:
        """Replace the particle set and reset all derived graph state."""
        p = self.scene.particles
        p.set_from_data(positions, colors, sizes)
        if category_indices is None:
            category_indices = np.zeros(p.count, dtype=np.int32)
        self.scene.category_indices = np.asarray(category_indices, dtype=np.int32)
        self.scene.category_names = list(category_names)
        self.scene.visible = None
        self.scene.sync_base_colors()
        self.scene.topology.load(self.scene.category_indices, category_names, labels)
        self.manager.reset_all()
        logger.info("Simulation loaded %d particles", p.count)

    def load_table(self, table: DataTable, embedding: np.ndarray) -> None:
        props = table.particle_properties(embedding)
        self.load(
            props.positions, props.colors, props.sizes,
            props.category_indices, table.category_names, table.labels,
        )

    def set_category_filter(self, shown: Optional[Mapping[int, bool]]) -> None:
        """Hide categories mapped to False; None shows everything."""
        if not shown:
            self.scene.visible = None
            return
        cats = self.scene.category_indices
        hidden = [c for c, on in shown.items() if not on]
        self.scene.visible = ~np.isin(cats, hidden)

    def category_labels(self) -> List[Tuple[str, Vec3]]:
        """(name, centroid of the rendered positions) per named category."""
        scene = self.scene
        if not scene.category_names or scene.category_indices.size < scene.count:
            return []
        return compute_category_centroids(
            scene.particles.current_positions, scene.category_indices,
            scene.category_names, scene.count,
        )

    def set_topology(self, mode: TopologyMode, now: float) -> None:
        """Explicit topology selection (UI)."""
        if self.scene.count == 0:
            return
        self.scene.topology.switch(mode, now)
        self.scene.sync_base_colors()
        self.manager.reset_all()

    # ---- frame -----------------------------------------------------------
    def step(self, dt: float, now: float) -> HandState:
        landmarks, _ = self.slot.read()
        self.hand = self.pipeline.update(landmarks, now)

        scene = self.scene
        p = scene.particles
        if p.count == 0:
            return self.hand

        self.manager.process(scene, self.hand, now)
        damp_positions(p.current_positions, p.target_positions, p.count, dt, self._damp_rate)

        if scene.visible is not None:
            fade_scales(p.scales, scene.visible)
        elif not np.all(p.scales == 1.0):
            fade_scales(p.scales, np.ones(p.count, dtype=bool))

        if scene.topology.tick(now):
            self.manager.reset_all()
        return self.hand

    def stop_tracking(self) -> None:
        """Neutral hand state after tracking stops; nothing stale survives a restart."""
        self.slot.clear()
        self.pipeline.reset()
        self.hand = HandState()
        self.manager.reset_all()
