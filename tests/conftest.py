import math

import pytest

from Camera import Camera
from GestureProcessor import GestureProcessor

# wrist -> MCP offsets for index, middle, ring, pinky
MCP_OFFSETS = ((-0.05, -0.2), (0.0, -0.2), (0.05, -0.2), (0.1, -0.2))
FINGER_INDICES = ((5, 8), (9, 12), (13, 16), (17, 20))


def _rotate(v, theta):
    c, s = math.cos(theta), math.sin(theta)
    return (v[0] * c - v[1] * s, v[0] * s + v[1] * c)


def build_hand(ratios=(1.6, 1.6, 1.6, 1.6), thumb_tip=None, wrist=(0.5, 0.9), splay=0.0):
    """
    21 (x, y) points with exact curl ratios. Each tip sits on the wrist->MCP
    line scaled by its ratio; `splay` rotates index and pinky tips apart
    around the wrist (ratios unchanged, spread factor grows).
    thumb_tip: absolute point, or ("index", dx, dy) relative to the index tip.
    """
    wx, wy = wrist
    pts = [(wx, wy)] * 21
    angles = (-splay, 0.0, 0.0, splay)
    for (mcp, tip), off, r, a in zip(FINGER_INDICES, MCP_OFFSETS, ratios, angles):
        pts[mcp] = (wx + off[0], wy + off[1])
        rx, ry = _rotate(off, a)
        pts[tip] = (wx + rx * r, wy + ry * r)

    if thumb_tip is None:
        thumb_tip = (wx - 0.3, wy - 0.3)
    elif thumb_tip[0] == "index":
        ix, iy = pts[8]
        thumb_tip = (ix + thumb_tip[1], iy + thumb_tip[2])
    pts[4] = thumb_tip
    return pts


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def camera():
    return Camera()


@pytest.fixture
def processor(camera):
    return GestureProcessor(camera, {"debug": {"log_transitions": False}})
