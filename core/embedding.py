"""
Dimensionality reduction — n×m feature matrix → n×3 embedding.

The layout core only consumes the final embedding; progress callbacks
exist for the UI. The default provider is scikit-learn PCA.
"""
from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol

import numpy as np
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

N_COMPONENTS = 3


class EmbeddingProvider(Protocol):
    def fit(self, matrix: np.ndarray,
            on_progress: Optional[ProgressCallback] = None) -> np.ndarray:
        ...


class PCAEmbedding:
    """Standardize, then project onto the first three principal components."""

    def __init__(self, random_state: int = 0) -> None:
        self._random_state = random_state

    def fit(self, matrix: np.ndarray,
            on_progress: Optional[ProgressCallback] = None) -> np.ndarray:
        report = on_progress or (lambda _: None)
        matrix = np.asarray(matrix, dtype=np.float64)
        n = matrix.shape[0] if matrix.ndim == 2 else 0
        report(0.0)

        if n == 0:
            report(1.0)
            return np.zeros((0, N_COMPONENTS))

        scaled = StandardScaler().fit_transform(matrix)
        report(0.3)

        components = min(N_COMPONENTS, n, scaled.shape[1])
        if components == 0:
            embedding = np.zeros((n, 0))
        else:
            pca = PCA(n_components=components, random_state=self._random_state)
            embedding = pca.fit_transform(scaled)
            logger.debug("PCA explained variance: %s", pca.explained_variance_ratio_)
        report(0.9)

        if embedding.shape[1] < N_COMPONENTS:
            embedding = np.pad(embedding, ((0, 0), (0, N_COMPONENTS - embedding.shape[1])))
        report(1.0)
        return embedding


_executor: Optional[ThreadPoolExecutor] = None


def run_embedding_async(
    matrix: np.ndarray,
    provider: Optional[EmbeddingProvider] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> "Future[np.ndarray]":
    """Run the provider off the frame thread; the Future resolves to an n×3 array."""
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="embedding")
    provider = provider or PCAEmbedding()
    return _executor.submit(provider.fit, matrix, on_progress)
