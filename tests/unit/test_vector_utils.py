import math

import pytest

from orrery.vector_utils import clamp, rotate_y, vec_cross, vec_len, vec_norm


def test_rotate_y_matches_orbit_convention():
    angle = 0.7
    x, y, z = rotate_y((0.0, 0.0, 4.0), angle)
    assert (x, y, z) == pytest.approx((4 * math.sin(angle), 0.0, 4 * math.cos(angle)))


def test_rotate_y_preserves_length_and_height():
    v = rotate_y((1.0, 2.0, 3.0), 2.3)
    assert v[1] == 2.0
    assert vec_len(v) == pytest.approx(math.sqrt(14))


def test_cross_and_norm():
    assert vec_cross((1, 0, 0), (0, 1, 0)) == (0, 0, 1)
    assert vec_norm((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)
    assert vec_norm((3.0, 0.0, 4.0)) == pytest.approx((0.6, 0.0, 0.8))


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
