"""
TopologyController — owns the active topology mode, the edge set and the
per-mode derived state (hub, cluster labels, edge labels).

Every switch is a full recompute. The new layout is written into the
particle targets (damping animates it) and committed into the base
positions once the frame clock passes the transition deadline. A second
switch before that simply overwrites the deadline.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

import numpy as np

from core.layout import (
    compute_centralized_layout,
    compute_decentralized_layout,
    compute_distributed_layout,
)
from domain.enums import TopologyMode
from domain.models import ClusterLabel, EdgeLabel, GraphEdge, LayoutResult
from domain.particles import ParticleSet
from domain.table import category_color
from utils.constants import DISTRIBUTED_K, EMISSIVE_MULTIPLIER, HUB_RGB, TOPOLOGY_TRANSITION
from utils.geometry import hex_to_rgb

logger = logging.getLogger(__name__)


class TopologyController:
    """
    Parameters
    ----------
    particles : ParticleSet
        Buffers the layouts read from and write to.
    transition : float
        Seconds between a switch and the commit of the new rest layout.
    k : int
        Neighbour count for distributed (k-NN) edges.
    """

    def __init__(
        self,
        particles: ParticleSet,
        transition: float = TOPOLOGY_TRANSITION,
        k: int = DISTRIBUTED_K,
    ) -> None:
        self._particles = particles
        self._transition = transition
        self._k = k

        self.mode: TopologyMode = TopologyMode.DISTRIBUTED
        self.edges: List[GraphEdge] = []
        self.hub_index: Optional[int] = None
        self.cluster_labels: List[ClusterLabel] = []
        self.edge_labels: List[EdgeLabel] = []

        self._category_indices = np.zeros(0, dtype=np.int32)
        self._category_names: Sequence[str] = ()
        self._labels: Optional[Sequence[str]] = None
        self._data_colors = np.zeros(0, dtype=np.float32)
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------
    def load(
        self,
        category_indices: np.ndarray,
        category_names: Sequence[str] = (),
        labels: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Adopt a freshly loaded data set: resets to the distributed mode
        with k-NN edges over the current rest positions.
        """
        p = self._particles
        self._category_indices = np.asarray(category_indices, dtype=np.int32)
        self._category_names = list(category_names)
        self._labels = labels
        self._data_colors = p.colors.copy()
        self._deadline = None

        result = compute_distributed_layout(p.base_positions, p.count, self._k, labels)
        self._clear_derived()
        self.mode = TopologyMode.DISTRIBUTED
        self.edges = result.edges
        self.edge_labels = result.edge_labels

    def switch(self, mode: TopologyMode, now: float) -> LayoutResult:
        """Recompute everything for `mode` and start the timed transition."""
        p = self._particles
        self._clear_derived()

        if mode == TopologyMode.CENTRALIZED:
            result = compute_centralized_layout(p.base_positions, p.count, self.edges)
            self.hub_index = result.hub_index
        elif mode == TopologyMode.DECENTRALIZED:
            colors = [category_color(i) for i in range(len(self._category_names))]
            result = compute_decentralized_layout(
                p.base_positions, p.count, self._category_indices,
                self._category_names, colors,
            )
            self.cluster_labels = result.cluster_labels
        else:
            result = compute_distributed_layout(p.base_positions, p.count, self._k, self._labels)
            self.edge_labels = result.edge_labels

        self.mode = mode
        self.edges = result.edges
        if p.count:
            p.set_target_positions(result.positions)
            p.colors[:] = self.topology_colors(mode)

        if self._deadline is not None:
            logger.debug("Replacing pending topology commit")
        self._deadline = now + self._transition
        logger.info("Topology → %s (%d edges)", mode.value, len(self.edges))
        return result

    def cycle(self, step: int, now: float) -> LayoutResult:
        return self.switch(self.mode.step(step), now)

    def tick(self, now: float) -> bool:
        """Commit the pending layout once its deadline passed. True on commit."""
        if self._deadline is None or now < self._deadline:
            return False
        self._deadline = None
        self._particles.commit_positions()
        logger.debug("Topology %s committed", self.mode.value)
        return True

    @property
    def transitioning(self) -> bool:
        return self._deadline is not None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    # ------------------------------------------------------------------
    def topology_colors(self, mode: TopologyMode) -> np.ndarray:
        """Flat RGB buffer for `mode`, derived from the data colours."""
        count = self._particles.count
        source = self._data_colors if self._data_colors.size == count * 3 else self._particles.colors
        colors = source.reshape(count, 3).copy()
        if mode == TopologyMode.CENTRALIZED and self.hub_index is not None:
            colors[self.hub_index] = np.asarray(HUB_RGB, dtype=np.float32) * EMISSIVE_MULTIPLIER
        elif mode == TopologyMode.DECENTRALIZED and self._category_indices.size >= count:
            for cat in np.unique(self._category_indices[:count]):
                rgb = np.asarray(hex_to_rgb(category_color(int(cat))), dtype=np.float32)
                colors[self._category_indices[:count] == cat] = rgb * EMISSIVE_MULTIPLIER
        return colors.reshape(-1)

    def _clear_derived(self) -> None:
        self.hub_index = None
        self.cluster_labels = []
        self.edge_labels = []
