import math

import pytest

from core.one_euro import LowPassFilter, OneEuroFilter, OneEuroFilter3D


def test_low_pass_seeds_with_first_value():
    lp = LowPassFilter()
    assert not lp.initialized
    assert lp.last_value() == 0.0
    assert lp.filter(5.0, 0.1) == 5.0
    assert lp.filter(15.0, 0.5) == pytest.approx(10.0)


def test_first_sample_passes_through():
    f = OneEuroFilter()
    assert f.filter(0.42, 0.0) == 0.42


def test_constant_signal_stays_constant():
    f = OneEuroFilter()
    t = 0.0
    for _ in range(50):
        out = f.filter(0.3, t)
        t += 1 / 30
    assert out == pytest.approx(0.3)


def test_step_is_smoothed_then_converges():
    f = OneEuroFilter(freq=30, min_cutoff=1.0, beta=0.0)
    f.filter(0.0, 0.0)
    first = f.filter(1.0, 1 / 30)
    assert 0.0 < first < 1.0

    t, out = 1 / 30, first
    for _ in range(200):
        t += 1 / 30
        nxt = f.filter(1.0, t)
        assert nxt >= out - 1e-12
        out = nxt
    assert out == pytest.approx(1.0, abs=1e-3)


def test_beta_reduces_lag_on_fast_motion():
    slow = OneEuroFilter(beta=0.0)
    fast = OneEuroFilter(beta=5.0)
    t = 0.0
    for i in range(10):
        value = i * 0.1
        a = slow.filter(value, t)
        b = fast.filter(value, t)
        t += 1 / 30
    assert abs(b - 0.9) < abs(a - 0.9)


def test_frequency_follows_timestamps():
    f = OneEuroFilter(freq=30)
    f.filter(0.0, 0.0)
    f.filter(0.0, 0.1)
    assert f.freq == pytest.approx(10.0)
    f.reset()
    assert f.freq == 30


def test_reset_forgets_history():
    f = OneEuroFilter()
    f.filter(0.0, 0.0)
    f.filter(1.0, 0.033)
    f.reset()
    assert f.filter(7.0, 1.0) == 7.0


def test_filter_3d_is_per_axis():
    f = OneEuroFilter3D()
    assert f.filter(0.1, 0.2, 0.3, 0.0) == (0.1, 0.2, 0.3)
    x, y, z = f.filter(0.1, 0.9, 0.3, 1 / 30)
    assert x == pytest.approx(0.1)
    assert 0.2 < y < 0.9
    assert z == pytest.approx(0.3)
    assert all(math.isfinite(v) for v in (x, y, z))
