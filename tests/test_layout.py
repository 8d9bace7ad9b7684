import math

import numpy as np
import pytest

from conftest import categorized_cloud
from core.graph import compute_knn_edges
from core.layout import (
    build_edge_labels,
    cluster_member_offset,
    compute_centralized_layout,
    compute_decentralized_layout,
    compute_distributed_layout,
    find_hub,
    group_by_category,
)
from domain.models import GraphEdge


@pytest.fixture
def data():
    positions, cats = categorized_cloud()
    return positions, cats, compute_knn_edges(positions, len(cats), 4)


# ---- centralized ---------------------------------------------------------
def test_centralized_is_a_star_around_the_origin(data):
    positions, cats, edges = data
    result = compute_centralized_layout(positions, 100, edges, radius=3.6)
    pts = result.positions.reshape(-1, 3)
    hub = result.hub_index

    assert pts[hub].tolist() == [0.0, 0.0, 0.0]
    radii = np.linalg.norm(np.delete(pts, hub, axis=0), axis=1)
    assert radii == pytest.approx(np.full(99, 3.6), abs=1e-4)

    assert len(result.edges) == 99
    assert all(hub in (e.source, e.target) for e in result.edges)
    assert len({e.key for e in result.edges}) == 99


def test_centralized_has_one_node_at_origin(data):
    positions, _, edges = data
    pts = compute_centralized_layout(positions, 100, edges).positions.reshape(-1, 3)
    assert int(np.sum(np.sum(pts ** 2, axis=1) == 0)) == 1


def test_hub_is_highest_degree_node():
    edges = [GraphEdge.between(2, i, 1.0) for i in (0, 1, 3)]
    assert find_hub(np.zeros(12, dtype=np.float32), 4, edges) == 2


def test_hub_without_edges_is_nearest_centroid():
    positions = np.array([0, 0, 0, 1, 0, 0, 9, 0, 0], dtype=np.float32)
    assert find_hub(positions, 3, []) == 1


def test_centralized_does_not_mutate_input(data):
    positions, _, edges = data
    before = positions.copy()
    compute_centralized_layout(positions, 100, edges)
    assert np.array_equal(positions, before)


# ---- decentralized -------------------------------------------------------
def test_decentralized_clusters_match_categories(data):
    positions, cats, _ = data
    result = compute_decentralized_layout(positions, 100, cats, ["a", "b", "c", "d", "e"])
    assert np.array_equal(result.node_clusters, cats)
    assert len(result.cluster_centers) == len(np.unique(cats))
    assert [label.text for label in result.cluster_labels] == ["a", "b", "c", "d", "e"]


def test_decentralized_members_stay_near_their_centre(data):
    positions, cats, _ = data
    result = compute_decentralized_layout(positions, 100, cats, spread=1.4)
    pts = result.positions.reshape(-1, 3)
    for node, cat in enumerate(cats):
        centre = np.asarray(result.cluster_centers[int(cat)])
        assert np.linalg.norm(pts[node] - centre) <= 1.4 + 1e-5


def test_decentralized_edges_bridge_every_cluster_pair(data):
    positions, cats, _ = data
    result = compute_decentralized_layout(positions, 100, cats)
    keys = [e.key for e in result.edges]
    assert len(keys) == len(set(keys))

    bridged = {
        tuple(sorted((int(cats[e.source]), int(cats[e.target]))))
        for e in result.edges if cats[e.source] != cats[e.target]
    }
    assert len(bridged) == 10


def test_decentralized_label_fallback(data):
    positions, cats, _ = data
    result = compute_decentralized_layout(positions, 100, cats)
    assert result.cluster_labels[0].text == "Cluster 0"
    assert result.cluster_labels[0].color == "#00ffa3"


def test_group_by_category_keeps_first_appearance_order():
    assert group_by_category(np.array([2, 0, 2, 1]), 4) == {2: [0, 2], 0: [1], 1: [3]}


def test_member_offsets_are_deterministic_and_distinct():
    offsets = [cluster_member_offset(r, 20, 1.4) for r in range(20)]
    assert offsets == [cluster_member_offset(r, 20, 1.4) for r in range(20)]
    assert len({tuple(round(v, 6) for v in o) for o in offsets}) == 20
    assert all(math.sqrt(sum(v * v for v in o)) <= 1.4 + 1e-9 for o in offsets)


# ---- distributed ---------------------------------------------------------
def test_distributed_keeps_positions(data):
    positions, _, _ = data
    result = compute_distributed_layout(positions, 100, k=4)
    assert np.array_equal(result.positions, positions)
    assert result.positions is not positions
    assert result.edges == compute_knn_edges(positions, 100, 4)


def test_edge_labels_are_capped_and_truncated(data):
    positions, _, _ = data
    labels = [f"item-with-a-long-name-{i}" for i in range(100)]
    result = compute_distributed_layout(positions, 100, k=4, labels=labels)
    assert len(result.edge_labels) == 40
    first = result.edge_labels[0]
    assert first.text == f"{labels[first.source][:12]} — {labels[first.target][:12]}"


def test_edge_labels_need_both_ends():
    edges = [GraphEdge(0, 1, 0.9), GraphEdge(1, 2, 0.5)]
    out = build_edge_labels(edges, ["a", "", "c"], 3)
    assert out == []
    out = build_edge_labels(edges, ["a", "b", "c"], 3)
    assert [label.text for label in out] == ["a — b", "b — c"]
    assert build_edge_labels(edges, None, 3) == []


def test_empty_layouts():
    empty = np.zeros(0, dtype=np.float32)
    assert compute_centralized_layout(empty, 0, []).edges == []
    assert compute_decentralized_layout(empty, 0, np.zeros(0)).edges == []
    assert compute_distributed_layout(empty, 0).edges == []


def test_negative_category_gets_fallback_label():
    positions = np.zeros(12, dtype=np.float32)
    cats = np.array([-1, -1, 0, 0])
    result = compute_decentralized_layout(positions, 4, cats, ["alpha", "beta"], ["#111111", "#222222"])
    texts = {label.text: label.color for label in result.cluster_labels}
    assert texts == {"Cluster -1": "#00ffa3", "alpha": "#111111"}
