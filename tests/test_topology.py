import numpy as np
import pytest

from core.physics import damp_positions
from core.topology import TopologyController
from domain.enums import TopologyMode
from domain.particles import ParticleSet
from utils.constants import EMISSIVE_MULTIPLIER, HUB_RGB


@pytest.fixture
def topo(particles, cloud):
    _, cats = cloud
    controller = TopologyController(particles, transition=1.0, k=4)
    controller.load(cats, ["a", "b", "c", "d", "e"], [f"n{i}" for i in range(100)])
    return controller


def settle(particles, steps=400):
    for _ in range(steps):
        damp_positions(particles.current_positions, particles.target_positions,
                       particles.count, 1 / 60, rate=4.0)


def test_mode_cycle_order():
    assert TopologyMode.CENTRALIZED.next() == TopologyMode.DECENTRALIZED
    assert TopologyMode.DISTRIBUTED.next() == TopologyMode.CENTRALIZED
    assert TopologyMode.CENTRALIZED.previous() == TopologyMode.DISTRIBUTED


def test_load_starts_distributed_with_knn_edges(topo):
    assert topo.mode == TopologyMode.DISTRIBUTED
    assert topo.edges
    assert len(topo.edge_labels) == 40
    assert not topo.transitioning


def test_centralized_switch_end_to_end(particles, topo):
    topo.switch(TopologyMode.CENTRALIZED, now=0.0)
    assert len(topo.edges) == 99
    assert topo.hub_index is not None
    assert topo.edge_labels == []

    settle(particles)
    assert topo.tick(now=1.0)
    base = particles.base
    at_origin = np.sum(base ** 2, axis=1) < 1e-6
    assert int(at_origin.sum()) == 1
    assert at_origin[topo.hub_index]


def test_switch_writes_targets_not_base(particles, topo):
    before = particles.base_positions.copy()
    result = topo.switch(TopologyMode.CENTRALIZED, now=0.0)
    assert np.array_equal(particles.base_positions, before)
    assert np.array_equal(particles.target_positions, result.positions)


def test_commit_waits_for_deadline(particles, topo):
    topo.switch(TopologyMode.DECENTRALIZED, now=10.0)
    assert topo.transitioning
    assert topo.deadline == pytest.approx(11.0)
    assert not topo.tick(now=10.5)
    assert topo.tick(now=11.0)
    assert not topo.transitioning
    assert not topo.tick(now=12.0)


def test_second_switch_overwrites_deadline(topo):
    topo.switch(TopologyMode.CENTRALIZED, now=0.0)
    topo.switch(TopologyMode.DECENTRALIZED, now=0.8)
    assert not topo.tick(now=1.2)
    assert topo.tick(now=1.8)
    assert topo.mode == TopologyMode.DECENTRALIZED


def test_derived_state_is_cleared_between_modes(topo):
    topo.switch(TopologyMode.CENTRALIZED, now=0.0)
    topo.switch(TopologyMode.DECENTRALIZED, now=0.0)
    assert topo.hub_index is None
    assert [label.text for label in topo.cluster_labels] == ["a", "b", "c", "d", "e"]
    topo.switch(TopologyMode.DISTRIBUTED, now=0.0)
    assert topo.cluster_labels == []
    assert topo.edge_labels


def test_cycle_walks_modes(topo):
    topo.cycle(1, now=0.0)
    assert topo.mode == TopologyMode.CENTRALIZED
    topo.cycle(-1, now=0.0)
    assert topo.mode == TopologyMode.DISTRIBUTED


def test_hub_is_coloured(particles, topo):
    topo.switch(TopologyMode.CENTRALIZED, now=0.0)
    hub_rgb = particles.colors.reshape(-1, 3)[topo.hub_index]
    assert hub_rgb == pytest.approx(np.asarray(HUB_RGB) * EMISSIVE_MULTIPLIER, rel=1e-5)


def test_switch_before_load_on_empty_set():
    controller = TopologyController(ParticleSet())
    result = controller.switch(TopologyMode.CENTRALIZED, now=0.0)
    assert result.edges == []
    assert controller.mode == TopologyMode.CENTRALIZED
