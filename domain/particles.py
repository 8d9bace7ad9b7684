"""
ParticleSet — the flat numeric buffers shared by physics, layouts and
the renderer.

Positions and colours are flat float32 arrays holding 3 floats per
particle; sizes and scales hold 1. `set_from_data` and
`commit_positions` replace buffers wholesale, so callers must not keep
references across those calls.
"""
from __future__ import annotations
from typing import Optional

import numpy as np

from utils.constants import DEFAULT_RGB, DEFAULT_SCALE, DEFAULT_SIZE, EMISSIVE_MULTIPLIER, SCENE_SCALE


def _empty(n: int) -> np.ndarray:
    return np.zeros(n, dtype=np.float32)


class ParticleSet:

    def __init__(self) -> None:
        self.count: int = 0
        self.base_positions    = _empty(0)
        self.current_positions = _empty(0)
        self.target_positions  = _empty(0)
        self.colors = _empty(0)
        self.sizes  = _empty(0)
        self.scales = _empty(0)
        self.selected_index: Optional[int] = None
        self.highlighted_category: Optional[int] = None

    # ------------------------------------------------------------------
    def set_from_data(
        self,
        positions: np.ndarray,
        colors: Optional[np.ndarray] = None,
        sizes: Optional[np.ndarray] = None,
    ) -> None:
        """Replace every buffer from a flat (3n,) or (n, 3) position array."""
        positions = np.asarray(positions, dtype=np.float32).reshape(-1)
        if positions.size % 3:
            raise ValueError(f"position buffer length {positions.size} is not a multiple of 3")
        count = positions.size // 3

        if colors is None:
            colors = np.tile(np.asarray(DEFAULT_RGB, dtype=np.float32) * EMISSIVE_MULTIPLIER, count)
        colors = np.asarray(colors, dtype=np.float32).reshape(-1)
        if colors.size != count * 3:
            raise ValueError(f"expected {count * 3} colour values, got {colors.size}")

        if sizes is None:
            sizes = np.full(count, DEFAULT_SIZE, dtype=np.float32)
        sizes = np.asarray(sizes, dtype=np.float32).reshape(-1)
        if sizes.size != count:
            raise ValueError(f"expected {count} sizes, got {sizes.size}")

        self.count = count
        self.base_positions    = positions.copy()
        self.current_positions = positions.copy()
        self.target_positions  = positions.copy()
        self.colors = colors.copy()
        self.sizes  = sizes.copy()
        self.scales = np.full(count, DEFAULT_SCALE, dtype=np.float32)
        self.selected_index = None
        self.highlighted_category = None

    def initialize_random(self, count: int, rng: Optional[np.random.Generator] = None) -> None:
        """Uniform cloud in [-SCENE_SCALE, SCENE_SCALE]³ (placeholder before data loads)."""
        rng = rng or np.random.default_rng()
        positions = rng.uniform(-SCENE_SCALE, SCENE_SCALE, size=count * 3).astype(np.float32)
        self.set_from_data(positions)

    def set_target_positions(self, positions: np.ndarray) -> None:
        positions = np.asarray(positions, dtype=np.float32).reshape(-1)
        if positions.size != self.count * 3:
            raise ValueError(f"expected {self.count * 3} target values, got {positions.size}")
        self.target_positions[:] = positions

    def commit_positions(self) -> None:
        """Make the rendered layout the new rest state."""
        self.base_positions = self.current_positions.copy()

    # ---- (n, 3) views ---------------------------------------------------
    @property
    def base(self) -> np.ndarray:
        return self.base_positions.reshape(-1, 3)

    @property
    def current(self) -> np.ndarray:
        return self.current_positions.reshape(-1, 3)

    @property
    def target(self) -> np.ndarray:
        return self.target_positions.reshape(-1, 3)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"<ParticleSet count={self.count} selected={self.selected_index}>"
