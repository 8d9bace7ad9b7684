import numpy as np
import pytest

from conftest import categorized_cloud
from core.graph import (
    compute_category_centroids,
    compute_knn_edges,
    knn_edge_weight,
    node_degrees,
    pairwise_sq_distances,
)


def line(n):
    return np.array([(float(i), 0.0, 0.0) for i in range(n)], dtype=np.float32).reshape(-1)


def test_pairwise_distances():
    d2 = pairwise_sq_distances(np.array([[0, 0, 0], [3, 4, 0]]))
    assert d2.tolist() == [[0, 25], [25, 0]]


def test_edge_weight_falls_with_distance():
    assert knn_edge_weight(0.0) == 1.0
    assert knn_edge_weight(1.0) == pytest.approx(0.5)
    assert knn_edge_weight(4.0) < knn_edge_weight(1.0)


def test_knn_edges_are_unique_and_ordered():
    positions, _ = categorized_cloud()
    edges = compute_knn_edges(positions, 100, 4)
    keys = [e.key for e in edges]
    assert len(keys) == len(set(keys))
    assert all(e.source < e.target for e in edges)


def test_knn_each_node_has_at_least_k_neighbours():
    positions, _ = categorized_cloud()
    edges = compute_knn_edges(positions, 100, 4)
    assert node_degrees(edges, 100).min() >= 4


def test_knn_mutual_neighbours_produce_one_edge():
    # two points: each is the other's nearest neighbour
    edges = compute_knn_edges(line(2), 2, 1)
    assert len(edges) == 1
    assert edges[0].key == (0, 1)
    assert edges[0].weight == pytest.approx(0.5)


def test_knn_on_a_line():
    edges = compute_knn_edges(line(4), 4, 1)
    assert sorted(e.key for e in edges) == [(0, 1), (1, 2), (2, 3)]


def test_knn_degenerate_inputs():
    assert compute_knn_edges(line(1), 1, 3) == []
    assert compute_knn_edges(line(5), 5, 0) == []
    # k larger than the set connects everything once
    assert len(compute_knn_edges(line(4), 4, 10)) == 6


def test_category_centroids_by_name():
    positions = np.array([0, 0, 0, 2, 0, 0, 0, 4, 0], dtype=np.float32)
    cats = np.array([1, 1, 0])
    out = compute_category_centroids(positions, cats, ["a", "b"], 3)
    assert out == [("b", (1.0, 0.0, 0.0)), ("a", (0.0, 4.0, 0.0))]


def test_category_centroids_skip_empty_names():
    positions = np.zeros(6, dtype=np.float32)
    out = compute_category_centroids(positions, np.array([0, 1]), ["", "x"], 2)
    assert [name for name, _ in out] == ["x"]
    assert compute_category_centroids(positions, np.array([0, 1]), None, 0) == []


def test_category_centroids_ignore_out_of_range_names():
    positions = np.zeros(6, dtype=np.float32)
    out = compute_category_centroids(positions, np.array([-1, 5]), ["alpha", "beta"], 2)
    assert [name for name, _ in out] == ["-1", "5"]
