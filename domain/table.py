"""
DataTable — column-oriented view over the loaded rows.

Category and label columns are resolved to integer indices / strings
once, at load time, so nothing in the per-frame path touches the
DataFrame.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from utils.constants import (
    DEFAULT_RGB,
    DEFAULT_SIZE,
    EMISSIVE_MULTIPLIER,
    SCENE_SCALE,
    SIZE_RANGE,
    TABLEAU10,
)
from utils.geometry import hex_to_rgb

logger = logging.getLogger(__name__)


@dataclass
class ParticleProperties:
    positions: np.ndarray        # (3n,) float32
    colors: np.ndarray           # (3n,) float32
    sizes: np.ndarray            # (n,) float32
    category_indices: np.ndarray  # (n,) int32


def category_color(index: int) -> str:
    return TABLEAU10[index % len(TABLEAU10)]


def normalize_embedding(embedding: np.ndarray, scale: float = SCENE_SCALE) -> np.ndarray:
    """Map each column of an n×3 embedding linearly onto [-scale, scale]."""
    embedding = np.asarray(embedding, dtype=np.float64)
    if embedding.ndim != 2 or embedding.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.float32)
    if embedding.shape[1] < 3:
        embedding = np.pad(embedding, ((0, 0), (0, 3 - embedding.shape[1])))
    embedding = embedding[:, :3]

    lo = embedding.min(axis=0)
    span = embedding.max(axis=0) - lo
    out = np.zeros_like(embedding)
    nonflat = span > 0
    out[:, nonflat] = (embedding[:, nonflat] - lo[nonflat]) / span[nonflat] * 2 * scale - scale
    return out.astype(np.float32)


class DataTable:
    """
    Parameters
    ----------
    frame : pd.DataFrame
        Raw rows as parsed by the loader.
    category_column : str, optional
        Column whose distinct values become category indices.
    label_column : str, optional
        Column used for per-row display labels (edge labels).
    size_column : str, optional
        Numeric column mapped onto particle size.
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        category_column: Optional[str] = None,
        label_column: Optional[str] = None,
        size_column: Optional[str] = None,
    ) -> None:
        self._frame = frame.reset_index(drop=True)
        self.category_column = category_column if category_column in self._frame else None
        self.label_column    = label_column if label_column in self._frame else None
        self.size_column     = size_column if size_column in self._frame else None

        self.category_names, self.category_indices = self._resolve_categories()
        self.labels = self._resolve_labels()
        logger.info("Loaded %d rows, %d categories", len(self), len(self.category_names))

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._frame)

    @property
    def columns(self) -> List[str]:
        return list(self._frame.columns)

    def numeric_matrix(self) -> np.ndarray:
        """All numeric columns as an n×m float matrix, NaNs filled with column means."""
        numeric = self._frame.select_dtypes(include="number")
        numeric = numeric.fillna(numeric.mean()).fillna(0.0)
        return numeric.to_numpy(dtype=np.float64)

    def particle_properties(self, embedding: np.ndarray) -> ParticleProperties:
        n = len(self)
        positions = normalize_embedding(embedding).reshape(-1)

        if self.category_column is not None:
            palette = np.array(
                [hex_to_rgb(category_color(i)) for i in range(max(len(self.category_names), 1))],
                dtype=np.float32,
            )
            colors = palette[self.category_indices] * EMISSIVE_MULTIPLIER
        else:
            colors = np.tile(np.asarray(DEFAULT_RGB, dtype=np.float32) * EMISSIVE_MULTIPLIER, (n, 1))

        sizes = np.full(n, DEFAULT_SIZE, dtype=np.float32)
        if self.size_column is not None:
            values = pd.to_numeric(self._frame[self.size_column], errors="coerce")
            lo, hi = values.min(), values.max()
            if pd.notna(lo) and hi > lo:
                scaled = SIZE_RANGE[0] + (values - lo) / (hi - lo) * (SIZE_RANGE[1] - SIZE_RANGE[0])
                sizes = scaled.fillna(DEFAULT_SIZE).to_numpy(dtype=np.float32)

        return ParticleProperties(
            positions=positions,
            colors=colors.astype(np.float32).reshape(-1),
            sizes=sizes,
            category_indices=self.category_indices.copy(),
        )

    # ------------------------------------------------------------------
    def _resolve_categories(self) -> Tuple[List[str], np.ndarray]:
        if self.category_column is None:
            return [], np.zeros(len(self), dtype=np.int32)
        values = self._frame[self.category_column].astype(str)
        codes, uniques = pd.factorize(values, sort=False)
        return [str(u) for u in uniques], codes.astype(np.int32)

    def _resolve_labels(self) -> Optional[List[str]]:
        if self.label_column is None:
            return None
        return self._frame[self.label_column].fillna("").astype(str).tolist()
