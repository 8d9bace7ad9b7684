"""
Topology layouts.

Each layout takes the current rest positions and returns a LayoutResult
with the new positions, a fresh edge set and any derived labels. No
layout mutates its inputs.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from core.graph import compute_knn_edges, node_degrees
from domain.models import ClusterLabel, EdgeLabel, GraphEdge, LayoutResult, Vec3
from utils.constants import (
    BRIDGE_EDGE_WEIGHT,
    BRIDGE_SAMPLE_SIZE,
    CENTRAL_RADIUS,
    CLUSTER_LABEL_COLOR,
    CLUSTER_LABEL_LIFT,
    CLUSTER_RADIUS,
    CLUSTER_SPREAD,
    DISTRIBUTED_K,
    EDGE_LABEL_CHARS,
    INTRA_CLUSTER_K,
    INTRA_EDGE_WEIGHT,
    MAX_EDGE_LABELS,
    STAR_EDGE_WEIGHT,
)
from utils.geometry import fibonacci_sphere_point

logger = logging.getLogger(__name__)


def _points(positions: np.ndarray, count: int) -> np.ndarray:
    return np.asarray(positions, dtype=np.float32)[: count * 3].reshape(count, 3)


# =========================
# CENTRALIZED
# =========================
def find_hub(base_positions: np.ndarray, count: int, edges: Sequence[GraphEdge]) -> int:
    """Highest-degree node; without edges, the node nearest the centroid."""
    degree = node_degrees(edges, count)
    if degree.max() > 0:
        return int(np.argmax(degree))
    points = _points(base_positions, count)
    d2 = np.sum((points - points.mean(axis=0)) ** 2, axis=1)
    return int(np.argmin(d2))


def compute_centralized_layout(
    base_positions: np.ndarray,
    count: int,
    edges: Sequence[GraphEdge],
    radius: float = CENTRAL_RADIUS,
) -> LayoutResult:
    """Hub at the origin, every other node on a Fibonacci sphere, star edges."""
    if count == 0:
        return LayoutResult(positions=np.zeros(0, dtype=np.float32))

    hub = find_hub(base_positions, count, edges)
    positions = np.zeros((count, 3), dtype=np.float32)

    spokes = [i for i in range(count) if i != hub]
    for rank, node in enumerate(spokes):
        positions[node] = fibonacci_sphere_point(rank, len(spokes), radius)

    star = [GraphEdge.between(hub, node, STAR_EDGE_WEIGHT) for node in spokes]
    logger.debug("Centralized layout: hub=%d spokes=%d", hub, len(spokes))
    return LayoutResult(positions=positions.reshape(-1), edges=star, hub_index=hub)


# =========================
# DECENTRALIZED
# =========================
def group_by_category(category_indices: np.ndarray, count: int) -> Dict[int, List[int]]:
    """category → member nodes, categories in first-appearance order."""
    groups: Dict[int, List[int]] = {}
    for node, cat in enumerate(np.asarray(category_indices[:count]).tolist()):
        groups.setdefault(int(cat), []).append(node)
    return groups


def cluster_member_offset(rank: int, size: int, spread: float) -> Vec3:
    """
    Deterministic coil around a cluster centre: the azimuth walks once
    around the circle, the polar angle steps by the golden ratio, and the
    radius widens with sqrt(rank / size).
    """
    azimuth = rank / size * 2 * math.pi
    polar = ((rank * 0.618) % 1) * math.pi
    r = spread * (0.2 + 0.8 * math.sqrt(rank / size))
    return (
        r * math.sin(polar) * math.cos(azimuth),
        r * math.sin(polar) * math.sin(azimuth),
        r * math.cos(polar),
    )


def _nearest_within(points: np.ndarray, members: List[int], node: int, k: int) -> List[int]:
    others = [m for m in members if m != node]
    if not others:
        return []
    d2 = np.sum((points[others] - points[node]) ** 2, axis=1)
    order = np.argsort(d2, kind="stable")[:k]
    return [others[i] for i in order]


def _closest_pair(points: np.ndarray, a: List[int], b: List[int]) -> tuple:
    sa, sb = a[:BRIDGE_SAMPLE_SIZE], b[:BRIDGE_SAMPLE_SIZE]
    d2 = np.sum((points[sa][:, None, :] - points[sb][None, :, :]) ** 2, axis=2)
    i, j = np.unravel_index(int(np.argmin(d2)), d2.shape)
    return sa[i], sb[j]


def compute_decentralized_layout(
    base_positions: np.ndarray,
    count: int,
    category_indices: np.ndarray,
    category_names: Optional[Sequence[str]] = None,
    category_colors: Optional[Sequence[str]] = None,
    cluster_radius: float = CLUSTER_RADIUS,
    spread: float = CLUSTER_SPREAD,
) -> LayoutResult:
    """
    One cluster per category: centres on a Fibonacci sphere, members
    coiled around their centre, dense intra-cluster edges plus one
    bridge per cluster pair.
    """
    if count == 0:
        return LayoutResult(positions=np.zeros(0, dtype=np.float32))

    groups = group_by_category(category_indices, count)
    positions = np.zeros((count, 3), dtype=np.float32)
    node_clusters = np.zeros(count, dtype=np.int32)
    centers: Dict[int, Vec3] = {}

    for g, (cat, members) in enumerate(groups.items()):
        center = fibonacci_sphere_point(g, len(groups), cluster_radius)
        centers[cat] = center
        for rank, node in enumerate(members):
            dx, dy, dz = cluster_member_offset(rank, len(members), spread)
            positions[node] = (center[0] + dx, center[1] + dy, center[2] + dz)
            node_clusters[node] = cat

    edges: Dict[tuple, GraphEdge] = {}

    def add(a: int, b: int, weight: float) -> None:
        edge = GraphEdge.between(a, b, weight)
        edges.setdefault(edge.key, edge)

    for members in groups.values():
        for node in members:
            for other in _nearest_within(positions, members, node, INTRA_CLUSTER_K):
                add(node, other, INTRA_EDGE_WEIGHT)

    clusters = list(groups.values())
    for a in range(len(clusters)):
        for b in range(a + 1, len(clusters)):
            na, nb = _closest_pair(positions, clusters[a], clusters[b])
            add(na, nb, BRIDGE_EDGE_WEIGHT)

    labels = []
    for cat, (cx, cy, cz) in centers.items():
        name = category_names[cat] if category_names is not None and 0 <= cat < len(category_names) else f"Cluster {cat}"
        color = category_colors[cat] if category_colors is not None and 0 <= cat < len(category_colors) else CLUSTER_LABEL_COLOR
        labels.append(ClusterLabel(name, (cx, cy + spread * CLUSTER_LABEL_LIFT, cz), color))

    logger.debug("Decentralized layout: %d clusters, %d edges", len(groups), len(edges))
    return LayoutResult(
        positions=positions.reshape(-1),
        edges=list(edges.values()),
        cluster_labels=labels,
        node_clusters=node_clusters,
        cluster_centers=centers,
    )


# =========================
# DISTRIBUTED
# =========================
def _short(text: str) -> str:
    return text[:EDGE_LABEL_CHARS]


def build_edge_labels(edges: Sequence[GraphEdge], labels: Optional[Sequence[str]],
                      count: int, limit: int = MAX_EDGE_LABELS) -> List[EdgeLabel]:
    """'A — B' labels for the heaviest (nearest) edges whose ends both have text."""
    if not labels or len(labels) < count:
        return []
    out: List[EdgeLabel] = []
    for e in sorted(edges, key=lambda e: -e.weight):
        if len(out) >= limit:
            break
        src, tgt = labels[e.source], labels[e.target]
        if src and tgt:
            out.append(EdgeLabel(e.source, e.target, f"{_short(src)} — {_short(tgt)}"))
    return out


def compute_distributed_layout(
    base_positions: np.ndarray,
    count: int,
    k: int = DISTRIBUTED_K,
    labels: Optional[Sequence[str]] = None,
) -> LayoutResult:
    """Positions unchanged; k-NN edges plus a capped set of edge labels."""
    if count == 0:
        return LayoutResult(positions=np.zeros(0, dtype=np.float32))

    positions = np.array(base_positions[: count * 3], dtype=np.float32)
    edges = compute_knn_edges(positions, count, k)
    return LayoutResult(
        positions=positions,
        edges=edges,
        edge_labels=build_edge_labels(edges, labels, count),
    )
