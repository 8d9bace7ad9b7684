"""
Graph processing on particle positions: brute-force k-NN edges and
labelled category centroids.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from domain.models import GraphEdge, Vec3


def pairwise_sq_distances(points: np.ndarray) -> np.ndarray:
    """n×n squared Euclidean distances for an (n, 3) array."""
    points = np.asarray(points, dtype=np.float64)
    diff = points[:, None, :] - points[None, :, :]
    return np.einsum("ijk,ijk->ij", diff, diff)


def knn_edge_weight(sq_distance: float) -> float:
    """Closer → heavier; 1.0 for coincident nodes, tends to 0 far away."""
    return 1.0 / (1.0 + float(np.sqrt(sq_distance)))


def compute_knn_edges(positions: np.ndarray, count: int, k: int) -> List[GraphEdge]:
    """
    Connect every node to its k nearest neighbours.

    Edges are undirected and deduplicated on (min(i, j), max(i, j)), in
    discovery order (node by node, nearest neighbour first).
    """
    if count < 2 or k < 1:
        return []
    k = min(k, count - 1)
    points = np.asarray(positions, dtype=np.float64)[: count * 3].reshape(count, 3)

    d2 = pairwise_sq_distances(points)
    np.fill_diagonal(d2, np.inf)
    # stable sort keeps index order among equal distances
    neighbours = np.argsort(d2, axis=1, kind="stable")[:, :k]

    edges: Dict[Tuple[int, int], GraphEdge] = {}
    for i in range(count):
        for j in neighbours[i]:
            edge = GraphEdge.between(i, int(j), knn_edge_weight(d2[i, j]))
            edges.setdefault(edge.key, edge)
    return list(edges.values())


def node_degrees(edges: Sequence[GraphEdge], count: int) -> np.ndarray:
    degree = np.zeros(count, dtype=np.int64)
    for e in edges:
        degree[e.source] += 1
        degree[e.target] += 1
    return degree


def compute_category_centroids(
    positions: np.ndarray,
    category_indices: np.ndarray,
    category_names: Optional[Sequence[str]],
    count: int,
) -> List[Tuple[str, Vec3]]:
    """(name, centroid) per category present, in first-appearance order."""
    if count == 0:
        return []
    points = np.asarray(positions, dtype=np.float64)[: count * 3].reshape(count, 3)
    cats = np.asarray(category_indices[:count])
    order = list(dict.fromkeys(int(c) for c in cats))

    out: List[Tuple[str, Vec3]] = []
    for cat in order:
        mean = points[cats == cat].mean(axis=0)
        name = category_names[cat] if category_names is not None and 0 <= cat < len(category_names) else str(cat)
        if not name:
            continue
        out.append((name, (float(mean[0]), float(mean[1]), float(mean[2]))))
    return out
