"""
Shared fixtures: synthetic MediaPipe-style landmark frames and a fake
clock, so nothing here needs a camera or the tracking stack.
"""
import numpy as np
import pytest

from domain.particles import ParticleSet

_WRIST = (0.50, 0.80, 0.0)
_THUMB_TIP = (0.25, 0.60, 0.0)
# (mcp index, x) for index / middle / ring / pinky
_FINGER_BASES = ((5, 0.40), (9, 0.47), (13, 0.53), (17, 0.60))
_MCP_Y = 0.60
_OPEN_TIP_Y = 0.35
_CURLED_TIP_Y = 0.65


def make_hand(extended=(True, True, True, True), pinch=False, dx=0.0, dy=0.0):
    """
    21-point frame in normalized image coordinates.

    extended : per finger (index, middle, ring, pinky)
    pinch    : thumb tip placed next to the index tip
    dx, dy   : translate the whole hand
    """
    points = [(0.0, 0.0, 0.0)] * 21
    points[0] = _WRIST
    points[4] = _THUMB_TIP
    points[1] = (0.45, 0.75, 0.0)
    points[2] = (0.38, 0.70, 0.0)
    points[3] = (0.31, 0.65, 0.0)

    for (mcp, x), out in zip(_FINGER_BASES, extended):
        tip_y = _OPEN_TIP_Y if out else _CURLED_TIP_Y
        points[mcp] = (x, _MCP_Y, 0.0)
        for step, j in enumerate((mcp + 1, mcp + 2), start=1):
            points[j] = (x, _MCP_Y + (tip_y - _MCP_Y) * step / 3, 0.0)
        points[mcp + 3] = (x, tip_y, 0.0)

    if pinch:
        ix, iy, _ = points[8]
        points[4] = (ix + 0.01, iy, 0.0)

    return [(x + dx, y + dy, z) for x, y, z in points]


def open_hand(**kw):
    return make_hand((True, True, True, True), **kw)


def fist(**kw):
    return make_hand((False, False, False, False), **kw)


def point(**kw):
    return make_hand((True, False, False, False), **kw)


def pinch(**kw):
    return make_hand((True, True, True, True), pinch=True, **kw)


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, dt):
        self.now += dt
        return self.now


@pytest.fixture
def clock():
    return FakeClock(100.0)


def categorized_cloud(per_category=20, categories=5, seed=3):
    """Flat positions and int32 category indices, equally sized groups."""
    rng = np.random.default_rng(seed)
    n = per_category * categories
    positions = rng.uniform(-4, 4, size=n * 3).astype(np.float32)
    cats = np.repeat(np.arange(categories, dtype=np.int32), per_category)
    return positions, cats


@pytest.fixture
def cloud():
    return categorized_cloud()


@pytest.fixture
def particles(cloud):
    positions, _ = cloud
    p = ParticleSet()
    p.set_from_data(positions)
    return p
