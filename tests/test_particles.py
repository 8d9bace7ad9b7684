import numpy as np
import pytest

from domain.particles import ParticleSet


def test_set_from_data_then_commit_round_trips(cloud):
    positions, _ = cloud
    p = ParticleSet()
    p.set_from_data(positions)
    p.commit_positions()
    assert np.array_equal(p.base_positions, positions)


def test_set_from_data_copies_input():
    src = np.arange(6, dtype=np.float32)
    p = ParticleSet()
    p.set_from_data(src)
    src[0] = 99
    assert p.base_positions[0] == 0
    assert p.current_positions is not p.base_positions
    assert p.target_positions is not p.base_positions


def test_defaults_for_colours_sizes_scales():
    p = ParticleSet()
    p.set_from_data(np.zeros((4, 3)))
    assert p.count == len(p) == 4
    assert p.colors.shape == (12,)
    assert p.sizes.tolist() == pytest.approx([0.04] * 4)
    assert p.scales.tolist() == [1.0] * 4


def test_set_from_data_validates_shapes():
    p = ParticleSet()
    with pytest.raises(ValueError):
        p.set_from_data(np.zeros(7))
    with pytest.raises(ValueError):
        p.set_from_data(np.zeros(6), colors=np.zeros(3))
    with pytest.raises(ValueError):
        p.set_from_data(np.zeros(6), sizes=np.zeros(3))


def test_commit_takes_rendered_positions(particles):
    particles.current_positions[:3] = (1, 2, 3)
    particles.commit_positions()
    assert particles.base[0].tolist() == [1, 2, 3]
    # the new rest buffer is independent of the live one
    particles.current_positions[0] = -5
    assert particles.base_positions[0] == 1


def test_set_target_positions_writes_in_place(particles):
    buffer = particles.target_positions
    particles.set_target_positions(np.ones(particles.count * 3))
    assert particles.target_positions is buffer
    assert particles.target.min() == 1.0
    with pytest.raises(ValueError):
        particles.set_target_positions(np.ones(3))


def test_initialize_random_is_bounded():
    p = ParticleSet()
    p.initialize_random(50, np.random.default_rng(1))
    assert p.count == 50
    assert np.abs(p.base_positions).max() <= 4.0
