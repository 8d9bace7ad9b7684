import numpy as np
import pytest

from conftest import categorized_cloud, fist, open_hand
from core.hand_pipeline import HandPipeline
from core.landmark_slot import LandmarkSlot
from core.simulation import Simulation
from domain.enums import Gesture, TopologyMode


@pytest.fixture
def sim():
    positions, cats = categorized_cloud()
    s = Simulation()
    s.load(positions, category_indices=cats, category_names=list("abcde"))
    return s


def run(sim, frame, frames, t0=0.0, dt=1 / 30):
    t = t0
    for _ in range(frames):
        sim.slot.write(frame, t)
        t += dt
        sim.step(dt, t)
    return t


# ---- hand pipeline -------------------------------------------------------
def test_pipeline_absent_then_open_hand():
    pipeline = HandPipeline()
    t = 0.0
    for _ in range(7):
        t += 1 / 30
        state = pipeline.update(None, t)
        assert not state.detected
        assert state.gesture == Gesture.NONE
    for _ in range(5):
        t += 1 / 30
        state = pipeline.update(open_hand(), t)
    assert state.detected
    assert state.gesture == Gesture.OPEN_HAND
    assert state.confidence == 1.0


def test_pipeline_keeps_last_position_when_hand_lost():
    pipeline = HandPipeline()
    seen = pipeline.update(open_hand(dx=0.1), 0.0)
    lost = pipeline.update(None, 0.033)
    assert not lost.detected
    assert lost.world_position == seen.world_position
    assert lost.smoothed_position == seen.smoothed_position


def test_pipeline_world_position_on_plane():
    state = HandPipeline().update(open_hand(), 0.0)
    assert state.world_position[2] == pytest.approx(0.0, abs=1e-6)


# ---- landmark slot -------------------------------------------------------
def test_slot_snapshots_frames():
    slot = LandmarkSlot()
    frame = [list(p) for p in open_hand()]
    slot.write(frame, 1.5)
    frame[0][0] = 42.0
    snapshot, ts = slot.read()
    assert ts == 1.5
    assert snapshot[0][0] == pytest.approx(0.5)
    assert slot.hand_detected
    slot.clear()
    assert slot.read() == (None, 0.0)
    assert not slot.hand_detected


# ---- simulation ----------------------------------------------------------
def test_load_resets_graph_state(sim):
    assert sim.scene.count == 100
    assert sim.scene.topology.mode == TopologyMode.DISTRIBUTED
    assert sim.scene.base_colors.size == 300


def test_no_hand_springs_back(sim):
    p = sim.scene.particles
    p.current_positions += 0.5
    run(sim, None, 300)
    assert np.allclose(p.current_positions, p.base_positions, atol=1e-3)


def test_fist_collapses_cloud(sim):
    p = sim.scene.particles
    spread_before = np.linalg.norm(p.current - p.current.mean(axis=0), axis=1).mean()
    run(sim, fist(), 120)
    assert sim.hand.gesture == Gesture.FIST
    spread_after = np.linalg.norm(p.current - p.current.mean(axis=0), axis=1).mean()
    assert spread_after < spread_before


def test_topology_commit_happens_in_step(sim):
    now = 0.0
    sim.set_topology(TopologyMode.CENTRALIZED, now)
    assert sim.scene.topology.transitioning
    run(sim, None, 60, t0=now)
    assert not sim.scene.topology.transitioning
    hub = sim.scene.topology.hub_index
    assert np.linalg.norm(sim.scene.particles.base[hub]) < 0.1


def test_category_filter_fades_hidden(sim):
    sim.set_category_filter({0: False, 1: True})
    run(sim, None, 60)
    scales = sim.scene.particles.scales
    hidden = sim.scene.category_indices == 0
    assert scales[hidden].max() < 0.01
    assert scales[~hidden].min() == pytest.approx(1.0)

    sim.set_category_filter(None)
    run(sim, None, 120)
    assert scales.min() > 0.99


def test_stop_tracking_leaves_neutral_state(sim):
    run(sim, open_hand(), 5)
    assert sim.hand.detected
    sim.stop_tracking()
    assert not sim.hand.detected
    assert sim.hand.gesture == Gesture.NONE
    assert sim.slot.read() == (None, 0.0)
    assert sim.pipeline.classifier.current == Gesture.NONE


def test_empty_simulation_steps_safely():
    sim = Simulation()
    sim.slot.write(open_hand(), 0.0)
    state = sim.step(1 / 30, 0.033)
    assert state.detected
    sim.set_topology(TopologyMode.CENTRALIZED, 0.1)
    assert sim.scene.topology.mode == TopologyMode.DISTRIBUTED


def test_category_labels_follow_rendered_positions(sim):
    labels = sim.category_labels()
    assert [name for name, _ in labels] == list("abcde")
    p = sim.scene.particles
    members = sim.scene.category_indices == 1
    assert labels[1][1] == pytest.approx(tuple(p.current[members].mean(axis=0)), abs=1e-4)


def test_category_labels_need_names():
    positions, cats = categorized_cloud()
    s = Simulation()
    s.load(positions, category_indices=cats)
    assert s.category_labels() == []
